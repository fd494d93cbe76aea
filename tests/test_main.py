"""Tests for the terminal front end."""

from pathlib import Path

from src.main import play_path, print_solutions, run
from src.game import StrandsGame
from src.grid import Grid
from src.game.models import RenderState
from src.utils.grid_visualizer import format_cell, render_board


SAMPLE_PUZZLE = Path(__file__).parent.parent / "puzzles" / "love_strands.yaml"


class TestRenderBoard:
    """Test the text renderer."""

    def test_plain_board(self):
        grid = Grid.from_rows(["AB", "CD"])
        lines = render_board(grid, RenderState()).splitlines()
        assert len(lines) == 3
        assert lines[1].split() == ["0", "A", "B"]

    def test_markers(self):
        assert format_cell("A", ()) == " A "
        assert format_cell("A", ("found",)) == "(A)"
        assert format_cell("A", ("found", "spangram")) == "*A*"
        assert format_cell("A", ("found", "selected")) == "[A]"
        assert format_cell("A", ("hinted",)) == "?A?"

    def test_render_found_cells(self):
        grid = Grid.from_rows(["AB", "CD"])
        render = RenderState(found_keys={"0-0"}, hinted_keys={"1-1"})
        board = render_board(grid, render)
        assert "(A)" in board
        assert "?D?" in board


class TestCommands:
    """Test typed commands against the sample puzzle."""

    def test_play_typed_path(self):
        game = StrandsGame.from_file(str(SAMPLE_PUZZLE))
        feedback = play_path(game, "0,0 1,0 2,0 3,1 4,1")
        assert feedback.code == "THEME_WORD_FOUND"
        assert feedback.word == "SMART"

    def test_play_bad_path(self, capsys):
        game = StrandsGame.from_file(str(SAMPLE_PUZZLE))
        assert play_path(game, "0,0 nope") is None
        assert "Invalid cell format" in capsys.readouterr().out

    def test_play_skips_illegal_cells(self, capsys):
        game = StrandsGame.from_file(str(SAMPLE_PUZZLE))
        feedback = play_path(game, "0,0 5,5")
        assert "Skipped 5,5" in capsys.readouterr().out
        assert feedback.code == "WORD_TOO_SHORT"

    def test_print_solutions(self, capsys):
        game = StrandsGame.from_file(str(SAMPLE_PUZZLE))
        print_solutions(game)
        out = capsys.readouterr().out
        assert "SMART: 0,0 1,0 2,0 3,1 4,1" in out
        assert "NOTJUSTSEX (spangram):" in out

    def test_run_until_quit(self, monkeypatch, capsys):
        game = StrandsGame.from_file(str(SAMPLE_PUZZLE))
        inputs = iter(["0,4 1,4 1,5", "hint", "quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))
        assert run(game) == 0
        out = capsys.readouterr().out
        assert "'TEN' is a word!" in out
        assert "A hint costs 3 points" in out
