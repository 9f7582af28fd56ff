from __future__ import annotations

import pytest

import project_config
from contracts.loader import load_puzzle
from telemetry import log as event_log
from tools.cli import solve as cli


PUZZLE = (
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
)

SOLUTION = (
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
)


def _write(path, rows):
    path.write_text("\n".join(rows) + "\n", encoding="ascii")
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in ("SUDOKU_EVENTS_ENABLED", "CLI_SUDOKU_EVENTS_ENABLED", "SUDOKU_TRACE_LEVEL", "CLI_SUDOKU_TRACE_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    yield
    event_log.reset()


def test_solves_named_file(tmp_path, capsys):
    path = _write(tmp_path / "p.dat", PUZZLE)
    assert cli.main([str(path)]) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "   Unsolved Puzzle" in out
    assert "5 3 4 | 6 7 8 | 9 1 2" in out
    assert "microseconds." in out


def test_default_file_is_loaded_from_working_directory(tmp_path, monkeypatch, capsys):
    _write(tmp_path / "puzzle0.dat", PUZZLE)
    monkeypatch.chdir(tmp_path)
    assert cli.main([]) == cli.EXIT_OK
    assert "Puzzle solved." in capsys.readouterr().out


def test_too_many_arguments_is_a_usage_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["a.dat", "b.dat"])
    assert excinfo.value.code == cli.EXIT_USAGE


def test_missing_named_file(tmp_path, capsys):
    code = cli.main([str(tmp_path / "absent.dat")])
    assert code == cli.EXIT_NAMED_FILE
    assert "not found" in capsys.readouterr().err


def test_missing_default_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert cli.main([]) == cli.EXIT_DEFAULT_FILE
    assert "puzzle0.dat" in capsys.readouterr().err


def test_malformed_file(tmp_path, capsys):
    rows = list(PUZZLE)
    rows[4] = "40080300"
    path = _write(tmp_path / "bad.dat", rows)
    assert cli.main([str(path)]) == cli.EXIT_NAMED_FILE
    assert "Invalid puzzle file format." in capsys.readouterr().err


def test_duplicate_digits_are_rejected(tmp_path, capsys):
    rows = list(SOLUTION)
    rows[0] = "554678912"
    path = _write(tmp_path / "dup.dat", rows)
    assert cli.main([str(path)]) == cli.EXIT_INVALID_PUZZLE
    err = capsys.readouterr().err
    assert "invariant.grid.duplicate_row" in err
    assert "$[0][1]" in err


def test_skip_validation_lets_duplicates_through(tmp_path):
    rows = list(SOLUTION)
    rows[0] = "554678912"
    path = _write(tmp_path / "dup.dat", rows)
    assert cli.main([str(path), "--skip-validation"]) == cli.EXIT_OK


def test_unsolvable_puzzle_exit_code(tmp_path, capsys):
    rows = ["023456789", "100000000"] + ["000000000"] * 7
    path = _write(tmp_path / "dead.dat", rows)
    assert cli.main([str(path)]) == cli.EXIT_UNSOLVED
    assert "No solution exists for this puzzle." in capsys.readouterr().out


def test_output_file_receives_solution(tmp_path):
    path = _write(tmp_path / "p.dat", PUZZLE)
    target = tmp_path / "solved.dat"
    assert cli.main([str(path), "--output", str(target)]) == cli.EXIT_OK
    assert load_puzzle(target) == [[int(ch) for ch in row] for row in SOLUTION]


def test_trace_flag_prints_search_trace(tmp_path, capsys):
    path = _write(tmp_path / "p.dat", PUZZLE)
    assert cli.main([str(path), "--trace"]) == cli.EXIT_OK
    assert "   Search Trace" in capsys.readouterr().out


def test_events_flag_appends_event(tmp_path):
    path = _write(tmp_path / "p.dat", PUZZLE)
    event_log.configure(tmp_path / "events")
    assert cli.main([str(path), "--events"]) == cli.EXIT_OK
    assert len(list((tmp_path / "events").rglob("solve_*.jsonl"))) == 1


def test_bad_trace_level_setting_is_a_config_error(tmp_path, monkeypatch, capsys):
    path = _write(tmp_path / "p.dat", PUZZLE)
    monkeypatch.setenv("SUDOKU_TRACE_LEVEL", "verbose")
    assert cli.main([str(path)]) == cli.EXIT_CONFIG
    captured = capsys.readouterr()
    assert "SUDOKU_TRACE_LEVEL" in captured.err
    assert "Unsolved Puzzle" not in captured.out


def test_trace_flag_overrides_bad_environment_level(tmp_path, monkeypatch):
    path = _write(tmp_path / "p.dat", PUZZLE)
    monkeypatch.setenv("SUDOKU_TRACE_LEVEL", "verbose")
    assert cli.main([str(path), "--trace"]) == cli.EXIT_OK


def test_output_is_not_written_for_unsolvable_puzzle(tmp_path, capsys):
    rows = ["023456789", "100000000"] + ["000000000"] * 7
    path = _write(tmp_path / "dead.dat", rows)
    target = tmp_path / "solved.dat"
    assert cli.main([str(path), "--output", str(target)]) == cli.EXIT_UNSOLVED
    assert not target.exists()
    assert "was not created" in capsys.readouterr().err


def test_missing_config_file_is_a_config_error(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("SUDOKU_CONFIG", str(tmp_path / "absent.toml"))
    project_config.reload()
    try:
        assert cli.main([]) == cli.EXIT_CONFIG
        assert "SUDOKU_CONFIG" in capsys.readouterr().err
    finally:
        monkeypatch.delenv("SUDOKU_CONFIG")
        project_config.reload()
