import pytest

from custodycompass.main import run_status


def test_status_check(config_dir, capsys):
    assert run_status(["--date", "2024-01-08", "--config-dir", str(config_dir), "--coparent-name", "Sam"]) == 0
    out = capsys.readouterr().out
    assert "Today: Mon, Jan 8" in out
    assert "Children are with: Sam" in out
    assert "Next transition: Children come to you (Wed, Jan 10)" in out
    assert "MLK Day: Mon, Jan 15 (7 days), yours" in out


def test_status_check_context(config_dir, capsys):
    assert run_status(["--date", "2024-01-08", "--config-dir", str(config_dir), "--context"]) == 0
    assert "CUSTODY STATUS: Children are with Co-parent." in capsys.readouterr().out


def test_status_check_school(config_dir, capsys):
    assert run_status(["--date", "2025-09-05", "--config-dir", str(config_dir)]) == 0
    out = capsys.readouterr().out
    assert "Alex has early release at Example Elementary (8:45 AM-1:30 PM) - Weekly early release" in out
    assert "Term 1" in out


def test_status_check_without_config(tmp_path, capsys):
    assert run_status(["--date", "2024-01-08", "--config-dir", str(tmp_path)]) == 1
    assert "schedule.json" in capsys.readouterr().out


def test_status_check_unreadable_schedule(tmp_path, capsys):
    (tmp_path / "schedule.json").write_bytes(b'\xff\xfe{}')
    assert run_status(["--date", "2024-01-08", "--config-dir", str(tmp_path)]) == 1
    assert "schedule.json" in capsys.readouterr().out


def test_unknown_timezone_is_rejected(config_dir, capsys):
    with pytest.raises(SystemExit) as exc:
        run_status(["--config-dir", str(config_dir), "--timezone", "Bad/Zone"])
    assert exc.value.code == 2
    assert "unknown timezone: Bad/Zone" in capsys.readouterr().err


def test_known_timezone(config_dir, capsys):
    assert run_status(["--config-dir", str(config_dir), "--timezone", "America/Denver"]) == 0
    assert "Today:" in capsys.readouterr().out
