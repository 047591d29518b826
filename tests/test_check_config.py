"""Tests for the configuration check tool."""
import check_config


def test_check_env_var_missing(monkeypatch):
    monkeypatch.delenv("MONGO_DB_EXTRA", raising=False)
    ok, status, value = check_config.check_env_var("MONGO_DB_EXTRA", required=True)
    assert not ok
    assert "MISSING" in status
    assert value == ""


def test_check_env_var_placeholder(monkeypatch):
    monkeypatch.setenv("MONGO_USER", "your_user")
    ok, status, _ = check_config.check_env_var("MONGO_USER")
    assert not ok
    assert "PLACEHOLDER" in status


def test_check_env_var_masks_sensitive(monkeypatch):
    monkeypatch.setenv("MONGO_PASSWORD", "hunter2hunter2")
    ok, _, value = check_config.check_env_var("MONGO_PASSWORD", sensitive=True)
    assert ok
    assert value == "hun..."


def test_main_exit_codes(monkeypatch, capsys):
    monkeypatch.setattr(check_config, "load_dotenv", lambda: None)
    for name in ("MONGO_USER", "MONGO_PASSWORD", "MONGO_CLUSTER", "MONGO_DB", "MONGO_COLLECTION"):
        monkeypatch.setenv(name, "value-for-" + name.lower())
    assert check_config.main() == 0

    monkeypatch.delenv("MONGO_COLLECTION")
    assert check_config.main() == 1
    assert "MONGO_COLLECTION" in capsys.readouterr().out
