from pathlib import Path

import config


def _write_config(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def _patch_paths(tmp_path, monkeypatch) -> Path:
    config_dir = tmp_path / ".versecoach"
    config_path = config_dir / "config.toml"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in ("VERSECOACH_TIMEZONE", "TYPED_RECALL_THRESHOLD", "GRADING_METHOD", "VERSECOACH_DB_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    return config_path


def test_load_config_copies_example_when_missing(tmp_path, monkeypatch):
    config_path = _patch_paths(tmp_path, monkeypatch)

    loaded = config.load_config()

    assert config_path.exists()
    assert loaded["calendar"]["timezone"] == "UTC"
    assert loaded["grading"] == {"typed_threshold": 0.8, "method": "levenshtein"}
    assert loaded["storage"]["db_name"] == "versecoach.db"


def test_env_overrides_file_values(tmp_path, monkeypatch):
    config_path = _patch_paths(tmp_path, monkeypatch)
    config_path.parent.mkdir()
    _write_config(config_path, "[calendar]\ntimezone = \"Europe/Oslo\"\n\n[grading]\ntyped_threshold = 0.9\n")
    monkeypatch.setenv("VERSECOACH_TIMEZONE", "America/Chicago")

    loaded = config.load_config()

    assert loaded["calendar"]["timezone"] == "America/Chicago"
    assert loaded["grading"]["typed_threshold"] == 0.9


def test_unknown_grading_method_falls_back(tmp_path, monkeypatch):
    config_path = _patch_paths(tmp_path, monkeypatch)
    config_path.parent.mkdir()
    _write_config(config_path, "[grading]\nmethod = \"vibes\"\n")

    assert config.get_config_value("grading", "method") == "levenshtein"
    assert config.get_config_value("storage", "missing", "fallback") == "fallback"
