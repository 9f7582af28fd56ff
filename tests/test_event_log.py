from __future__ import annotations

import json

import pytest

import project_config
from telemetry import log as event_log


@pytest.fixture(autouse=True)
def reset_event_log():
    yield
    event_log.reset()


def test_events_are_written_under_dated_directory(tmp_path):
    event_log.configure(tmp_path)
    path = event_log.append_event({"event": "solve.completed", "solved": True})

    assert path.parent.parent == tmp_path
    assert len(path.parent.name) == 8 and path.parent.name.isdigit()
    assert path.name == "solve_00.jsonl"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["solved"] is True
    assert payload["ts"].endswith("+00:00")


def test_existing_timestamp_is_preserved(tmp_path):
    event_log.configure(tmp_path)
    path = event_log.append_event({"event": "x", "ts": "2024-01-01T00:00:00.000+00:00"})
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["ts"] == "2024-01-01T00:00:00.000+00:00"


def test_files_rotate_when_size_limit_is_reached(tmp_path):
    event_log.configure(tmp_path, max_bytes=1)
    first = event_log.append_event({"event": "a"})
    second = event_log.append_event({"event": "b"})

    assert first.name == "solve_00.jsonl"
    assert second.name == "solve_01.jsonl"
    assert event_log.current_log_path() == second


def test_appends_share_a_file_below_limit(tmp_path):
    event_log.configure(tmp_path)
    first = event_log.append_event({"event": "a"})
    second = event_log.append_event({"event": "b"})
    assert first == second
    assert len(first.read_text(encoding="utf-8").splitlines()) == 2


def test_reset_falls_back_to_configured_directory(tmp_path, monkeypatch):
    config = tmp_path / "config.toml"
    config.write_text(f'[events]\ndir = "{(tmp_path / "from_config").as_posix()}"\n', encoding="utf-8")
    monkeypatch.setenv("SUDOKU_CONFIG", str(config))
    project_config.reload()
    try:
        event_log.configure(tmp_path / "explicit")
        event_log.append_event({"event": "a"})
        event_log.reset()

        assert event_log.current_log_path() is None
        assert event_log.log_dir() == tmp_path / "from_config"
        path = event_log.append_event({"event": "b"})
        assert path.parent.parent == tmp_path / "from_config"
    finally:
        monkeypatch.delenv("SUDOKU_CONFIG")
        project_config.reload()
