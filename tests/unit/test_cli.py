"""
Unit tests for run_py_cli/cli/

Coverage plan
─────────────
arg parsing      → 3 tests (defaults, overrides, bad tick rate)
bootstrap_store  → 2 tests (fresh seed, corrupt file)
main             → 3 tests (no tty → 1, corrupt registry → 1, quit → 0)
"""

from unittest.mock import patch

import pytest


def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from run_py_cli.cli.main import build_parser
    return build_parser().parse_args(args)


@pytest.fixture
def env_file(tmp_path):
    """Settings file pointing the registry into tmp_path."""
    env = tmp_path / "test.env"
    env.write_text(f"DATABASE_ADDR={tmp_path / 'data' / 'db.json'}\n", encoding="utf-8")
    return env


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_defaults(self):
        ns = _parse([])
        assert ns.env == ".env"
        assert ns.tick_rate == 250
        assert ns.timeout is None
        assert ns.log_file is None
        assert ns.debug is False

    def test_overrides(self):
        ns = _parse(["--env", "x.env", "--tick-rate", "100", "--timeout", "2.5", "--debug"])
        assert ns.env == "x.env"
        assert ns.tick_rate == 100
        assert ns.timeout == 2.5
        assert ns.debug is True

    def test_non_positive_tick_rate_exits(self, env_file):
        from run_py_cli.cli.main import main
        with pytest.raises(SystemExit):
            main(["--env", str(env_file), "--tick-rate", "0"])


# ─────────────────────────────────────────────────────────────────────────────
# 2. Store bootstrap
# ─────────────────────────────────────────────────────────────────────────────

class TestBootstrap:

    def test_fresh_registry_is_seeded(self, tmp_path):
        from run_py_cli.cli.main import bootstrap_store
        from run_py_cli.config import AppConfig
        cfg = AppConfig(database_addr=str(tmp_path / "nested" / "db.json"))
        store = bootstrap_store(cfg)
        assert [r.target for r in store.load()] == ["default_script.py"]

    def test_corrupt_registry_raises_store_error(self, tmp_path):
        from run_py_cli.cli.main import bootstrap_store
        from run_py_cli.config import AppConfig
        from run_py_cli.exceptions import StoreError
        db = tmp_path / "db.json"
        db.write_text("[1, 2", encoding="utf-8")
        with pytest.raises(StoreError):
            bootstrap_store(AppConfig(database_addr=str(db)))


# ─────────────────────────────────────────────────────────────────────────────
# 3. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_terminal_failure_exits_one(self, env_file, tmp_path, capsys):
        from run_py_cli.cli.main import main
        from run_py_cli.exceptions import TerminalError
        with patch("run_py_cli.cli.main.run_session", side_effect=TerminalError("no tty")):
            code = main(["--env", str(env_file), "--log-file", str(tmp_path / "t.log")])
        assert code == 1
        assert "no tty" in capsys.readouterr().err
        assert (tmp_path / "data" / "db.json").is_file()

    def test_corrupt_registry_exits_one(self, env_file, tmp_path, capsys):
        from run_py_cli.cli.main import main
        db = tmp_path / "data" / "db.json"
        db.parent.mkdir(parents=True)
        db.write_text("{}", encoding="utf-8")
        with patch("run_py_cli.cli.main.run_session") as mock_session:
            code = main(["--env", str(env_file), "--log-file", str(tmp_path / "t.log")])
        assert code == 1
        mock_session.assert_not_called()
        assert "JSON list" in capsys.readouterr().err

    def test_session_exit_code_is_returned(self, env_file, tmp_path):
        from run_py_cli.cli.main import main
        with patch("run_py_cli.cli.main.run_session", return_value=0) as mock_session:
            code = main(["--env", str(env_file), "--log-file", str(tmp_path / "t.log")])
        assert code == 0
        app, cfg, _console = mock_session.call_args[0]
        assert cfg.database_addr == str(tmp_path / "data" / "db.json")
        assert app.config is cfg
