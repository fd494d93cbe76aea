from unittest.mock import Mock, patch
import pytest
import requests

from src.game import (
    OracleConfig,
    WordListOracle,
    HttpWordOracle,
    LLMWordOracle,
    create_oracle,
)


def create_mock_response(content: str = "<answer>YES</answer>", model: str = "gpt-5-nano") -> Mock:
    """
    Create a mock response matching litellm's ModelResponse structure.

    Only the fields the oracle reads are meaningful:
    response.choices[0].message.content
    """
    return Mock(
        id='chatcmpl-test123',
        model=model,
        object='chat.completion',
        choices=[
            Mock(
                finish_reason='stop',
                index=0,
                message=Mock(
                    content=content,
                    role='assistant',
                )
            )
        ],
        usage=Mock(
            completion_tokens=3,
            prompt_tokens=60,
            total_tokens=63
        ),
    )


def create_http_response(status_code: int = 200, body=None, json_error: bool = False) -> Mock:
    response = Mock(status_code=status_code, ok=200 <= status_code < 300)
    if json_error:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


class TestWordListOracle:
    """Test cases for the local word list oracle."""

    def test_case_insensitive(self):
        oracle = WordListOracle(words={"heart", "Rose"})
        assert oracle.check("HEART")
        assert oracle.check("rose")
        assert not oracle.check("tulip")

    def test_min_length(self):
        oracle = WordListOracle(words={"at", "cat"}, min_length=3)
        assert not oracle.check("at")
        assert oracle.check("cat")

    def test_empty_list_rejects_everything(self):
        assert not WordListOracle().check("CAT")

    def test_from_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# comment\ncat\n\ndog\n")
        oracle = WordListOracle.from_file(path)
        assert oracle.words == {"CAT", "DOG"}

    def test_from_file_indented_comment(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("cat\n   # loved ones\n\t#pets\ndog\n")
        oracle = WordListOracle.from_file(path)
        assert oracle.words == {"CAT", "DOG"}

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            WordListOracle.from_file(tmp_path / "missing.txt")


class TestHttpWordOracle:
    """Test cases for the HTTP oracle."""

    @patch('requests.post')
    def test_valid_word(self, mock_post):
        mock_post.return_value = create_http_response(body={"valid": True})

        oracle = HttpWordOracle(url="http://localhost:3000/api/validate-word", timeout=2.0)
        assert oracle.check("HEART") is True

        mock_post.assert_called_once()
        call_args, call_kwargs = mock_post.call_args
        assert call_args[0] == "http://localhost:3000/api/validate-word"
        assert call_kwargs["json"] == {"word": "HEART"}
        assert call_kwargs["timeout"] == 2.0

    @patch('requests.post')
    def test_invalid_word(self, mock_post):
        mock_post.return_value = create_http_response(body={"valid": False})
        assert HttpWordOracle(url="http://x").check("QZX") is False

    @patch('requests.post')
    def test_non_success_status(self, mock_post):
        mock_post.return_value = create_http_response(status_code=500, body={"valid": True})
        assert HttpWordOracle(url="http://x").check("HEART") is False

    @patch('requests.post')
    def test_transport_failure(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")
        assert HttpWordOracle(url="http://x").check("HEART") is False

    @patch('requests.post')
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.Timeout("slow")
        assert HttpWordOracle(url="http://x").check("HEART") is False

    @patch('requests.post')
    def test_bad_json(self, mock_post):
        mock_post.return_value = create_http_response(json_error=True)
        assert HttpWordOracle(url="http://x").check("HEART") is False

    @patch('requests.post')
    def test_missing_valid_field(self, mock_post):
        mock_post.return_value = create_http_response(body={"ok": True})
        assert HttpWordOracle(url="http://x").check("HEART") is False


class TestLLMWordOracle:
    """Test cases for the LiteLLM oracle."""

    @patch('litellm.completion')
    def test_yes(self, mock_completion):
        mock_completion.return_value = create_mock_response("<answer>YES</answer>")

        oracle = LLMWordOracle(model="gpt-5-nano")
        assert oracle.check("heart") is True

        mock_completion.assert_called_once()
        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["model"] == "gpt-5-nano"
        assert call_kwargs["temperature"] == 0.0
        assert call_kwargs["messages"][0]["role"] == "system"
        assert call_kwargs["messages"][1] == {"role": "user", "content": "Word: HEART"}
        assert "max_tokens" not in call_kwargs

    @patch('litellm.completion')
    def test_no(self, mock_completion):
        mock_completion.return_value = create_mock_response("<answer>NO</answer>")
        assert LLMWordOracle(model="gpt-5-nano").check("QZX") is False

    @patch('litellm.completion')
    def test_additional_params_and_max_tokens(self, mock_completion):
        mock_completion.return_value = create_mock_response()

        oracle = LLMWordOracle(model="gpt-5-nano", max_tokens=10, top_p=0.9)
        oracle.check("ROSE")

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["max_tokens"] == 10
        assert call_kwargs["top_p"] == 0.9

    @patch('litellm.completion')
    def test_answers_cached(self, mock_completion):
        mock_completion.return_value = create_mock_response()

        oracle = LLMWordOracle(model="gpt-5-nano")
        assert oracle.check("rose")
        assert oracle.check("ROSE")
        mock_completion.assert_called_once()

    @patch('litellm.completion')
    def test_api_error(self, mock_completion):
        mock_completion.side_effect = Exception("rate limited")
        assert LLMWordOracle(model="gpt-5-nano").check("ROSE") is False

    @patch('litellm.completion')
    def test_errors_not_cached(self, mock_completion):
        """A failed call is retried on the next check."""
        mock_completion.side_effect = [Exception("rate limited"), create_mock_response()]

        oracle = LLMWordOracle(model="gpt-5-nano")
        assert oracle.check("ROSE") is False
        assert oracle.check("ROSE") is True

    def test_parse_answer(self):
        assert LLMWordOracle.parse_answer("<answer> yes </answer>") is True
        assert LLMWordOracle.parse_answer("YES") is True
        assert LLMWordOracle.parse_answer("Maybe") is False
        assert LLMWordOracle.parse_answer("") is False
        assert LLMWordOracle.parse_answer(None) is False


class TestCreateOracle:
    """Test building oracles from configuration."""

    def test_none_gives_empty_word_list(self):
        oracle = create_oracle(None)
        assert isinstance(oracle, WordListOracle)
        assert not oracle.check("CAT")

    def test_wordlist_inline_and_file(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("dog\n")
        oracle = create_oracle(OracleConfig(kind="wordlist", words=["cat"], path=str(path)), min_length=3)
        assert oracle.check("CAT")
        assert oracle.check("DOG")
        assert oracle.min_length == 3

    def test_http(self):
        oracle = create_oracle(OracleConfig(kind="http", url="http://x", timeout=1.5))
        assert isinstance(oracle, HttpWordOracle)
        assert oracle.timeout == 1.5

    def test_http_requires_url(self):
        with pytest.raises(ValueError):
            create_oracle(OracleConfig(kind="http"))

    def test_llm_with_extra_params(self):
        oracle = create_oracle(OracleConfig(kind="llm", model="gpt-5-nano", top_p=0.5))
        assert isinstance(oracle, LLMWordOracle)
        assert oracle.additional_params["top_p"] == 0.5

    def test_http_default_timeout(self):
        oracle = create_oracle(OracleConfig(kind="http", url="http://x"))
        assert oracle.timeout == 5.0

    @patch('litellm.completion')
    def test_llm_timeout_passed_to_litellm(self, mock_completion):
        mock_completion.return_value = create_mock_response()

        oracle = create_oracle(OracleConfig(kind="llm", model="gpt-5-nano", timeout=12.0))
        assert oracle.check("CAT") is True

        call_kwargs = mock_completion.call_args[1]
        assert call_kwargs["timeout"] == 12.0

    @patch('litellm.completion')
    def test_llm_without_timeout(self, mock_completion):
        mock_completion.return_value = create_mock_response()

        create_oracle(OracleConfig(kind="llm", model="gpt-5-nano")).check("CAT")
        assert "timeout" not in mock_completion.call_args[1]

    def test_llm_requires_model(self):
        with pytest.raises(ValueError):
            create_oracle(OracleConfig(kind="llm"))
