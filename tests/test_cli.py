import logging

import pytest

import penrose_tiler.__main__ as cli
from penrose_tiler import read_history


@pytest.fixture(autouse=True)
def _restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_grow_writes_history(tmp_path, capsys):
    output = tmp_path / "out" / "patch.txt"

    cli.main(["grow", "--steps", "12", "--seed", "5", "--root", "fat", "--output", str(output)])

    out = capsys.readouterr().out
    records = read_history(output)
    assert f"Tiles: {len(records)}" in out
    assert "  (none)" in out
    assert f"History written to {output}" in out
    assert records[0].is_root


def test_replay_prints_tiles(tmp_path, capsys):
    history = tmp_path / "history.txt"
    history.write_text("root skinny\non 0 side 1 fat\n", encoding="utf-8")

    cli.main(["replay", str(history), "--tiles"])

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("#0 skinny: (")
    assert lines[1].startswith("#1 fat: (")
    assert "Tiles: 2" in lines


def test_replay_round_trips_output(tmp_path, capsys):
    history = tmp_path / "history.txt"
    history.write_text("# saved\nroot fat\non 0 side 0 skinny\n", encoding="utf-8")
    output = tmp_path / "copy.txt"

    cli.main(["replay", str(history), "--output", str(output)])

    assert read_history(output) == read_history(history)
    assert output.read_text(encoding="utf-8").startswith("# penrose placement history\n")


def test_grow_passes_options_to_engine(monkeypatch, capsys):
    configs = []
    original = cli.PenroseTiler

    def _tiler(config=None):
        configs.append(config)
        return original(config)

    monkeypatch.setattr(cli, "PenroseTiler", _tiler)

    cli.main(["grow", "--steps", "0", "--seed", "3", "--no-validity"])

    assert len(configs) == 1
    assert configs[0].random_seed == 3
    assert not configs[0].check_validity
    assert "Tiles: 1" in capsys.readouterr().out


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        cli.main(["shrink"])


def _package_records(caplog):
    return [r for r in caplog.records if r.name.startswith("penrose_tiler")]


def test_warning_log_level_hides_info(caplog, capsys):
    cli.main(["--log-level", "WARNING", "grow", "--steps", "3", "--seed", "1", "--root", "fat"])

    assert logging.getLogger().level == logging.WARNING
    assert [r for r in _package_records(caplog) if r.levelno < logging.WARNING] == []


def test_debug_log_level_traces_engine_calls(caplog, capsys):
    cli.main(["--log-level", "DEBUG", "grow", "--steps", "1", "--seed", "1", "--root", "fat"])

    messages = [r.getMessage() for r in _package_records(caplog) if r.levelno == logging.DEBUG]
    assert any("PenroseTiler.place_root" in message for message in messages)
