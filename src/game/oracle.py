"""
Word-validity oracles.

An oracle answers "is this string an English word?" for discoveries that are
not theme answers. Every oracle reports transport errors and unexpected
responses as "not a word" instead of raising.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import litellm
import requests
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .models import OracleConfig


logger = logging.getLogger(__name__)


ORACLE_SYSTEM_PROMPT = """You judge words for a word-search puzzle.

Reply with <answer>YES</answer> if the given string is a standard English dictionary word \
(common nouns, verbs, adjectives, plurals and inflections count), and <answer>NO</answer> otherwise. \
Proper nouns, abbreviations and misspellings are NO. Reply with the tag only."""


class WordOracle(BaseModel):
    """Base class for word-validity oracles."""

    def check(self, word: str) -> bool:
        """Return True if `word` is a valid English word."""
        raise NotImplementedError


class WordListOracle(WordOracle):
    """Oracle backed by a local word list (one word per line)."""

    words: Set[str] = Field(default_factory=set)
    min_length: int = 1

    def model_post_init(self, __context) -> None:
        """Normalize the word list to upper case."""
        self.words = {w.strip().upper() for w in self.words if w.strip()}

    @classmethod
    def from_file(cls, path: str | Path, min_length: int = 1) -> "WordListOracle":
        """
        Load a word list from a text file.

        Args:
            path: Text file with one word per line; blank lines and '#' comments are skipped
            min_length: Words shorter than this are never valid

        Returns:
            A WordListOracle holding the file's words
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Word list not found: {path}")

        with open(path) as f:
            lines = [line.strip() for line in f]
        words = [line for line in lines if line and not line.startswith("#")]

        logger.info("Loaded %d words from %s", len(words), path)
        return cls(words=set(words), min_length=min_length)

    def check(self, word: str) -> bool:
        normalized = word.strip().upper()
        return len(normalized) >= self.min_length and normalized in self.words


class HttpWordOracle(WordOracle):
    """
    Oracle backed by an HTTP endpoint.

    Posts `{"word": ...}` as JSON and expects `{"valid": bool}` back. Non-2xx
    responses, transport failures and malformed bodies count as invalid.
    """

    url: str
    timeout: float = 5.0

    def check(self, word: str) -> bool:
        try:
            response = requests.post(self.url, json={"word": word}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Word validation request for '%s' failed: %s", word, e)
            return False

        if not response.ok:
            logger.warning("Word validation for '%s' returned HTTP %s", word, response.status_code)
            return False

        try:
            data = response.json()
        except ValueError:
            logger.warning("Word validation for '%s' returned a non-JSON body", word)
            return False

        return isinstance(data, dict) and bool(data.get("valid"))


class LLMWordOracle(WordOracle):
    """
    Oracle that asks a language model via LiteLLM.

    Answers are cached per word for the lifetime of the oracle.
    """

    model_config = ConfigDict(extra='allow')

    model: str
    temperature: float = 0.0
    max_tokens: Optional[int] = None
    timeout: Optional[float] = None

    _cache: Dict[str, bool] = PrivateAttr(default_factory=dict)

    @property
    def additional_params(self) -> Dict[str, Any]:
        """Get additional parameters passed during initialization."""
        return self.__pydantic_extra__ if self.__pydantic_extra__ else {}

    def build_messages(self, word: str) -> List[Dict[str, str]]:
        """Messages sent to the model for one word, in OpenAI chat format."""
        return [
            {"role": "system", "content": ORACLE_SYSTEM_PROMPT},
            {"role": "user", "content": f"Word: {word}"},
        ]

    @staticmethod
    def parse_answer(content: Optional[str]) -> bool:
        """Read a YES/NO answer; anything else counts as NO."""
        if not content:
            return False

        match = re.search(r'<answer>\s*(YES|NO)\s*</answer>', content, re.IGNORECASE)
        if match:
            return match.group(1).upper() == "YES"
        return content.strip().upper() == "YES"

    def check(self, word: str) -> bool:
        normalized = word.strip().upper()
        if normalized in self._cache:
            return self._cache[normalized]

        params = {
            "model": self.model,
            "messages": self.build_messages(normalized),
            "temperature": self.temperature,
            **self.additional_params,
        }
        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens
        if self.timeout is not None:
            params["timeout"] = self.timeout

        try:
            response = litellm.completion(**params)
            content = response.choices[0].message.content
        except Exception as e:
            logger.warning("LLM word validation for '%s' failed: %s", normalized, e)
            return False

        valid = self.parse_answer(content)
        self._cache[normalized] = valid
        return valid


def create_oracle(config: Optional[OracleConfig], min_length: int = 1) -> WordOracle:
    """
    Build an oracle from its configuration.

    A missing configuration yields an empty word list, so every non-theme
    word is rejected.
    """
    if config is None:
        return WordListOracle(min_length=min_length)

    if config.kind == "http":
        if not config.url:
            raise ValueError("HTTP oracle requires 'url'")
        if config.timeout is None:
            return HttpWordOracle(url=config.url)
        return HttpWordOracle(url=config.url, timeout=config.timeout)

    if config.kind == "llm":
        if not config.model:
            raise ValueError("LLM oracle requires 'model'")
        extra = config.__pydantic_extra__ or {}
        return LLMWordOracle(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            **extra,
        )

    oracle = WordListOracle(words=set(config.words), min_length=min_length)
    if config.path:
        oracle.words |= WordListOracle.from_file(config.path).words
    return oracle
