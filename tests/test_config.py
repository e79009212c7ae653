from __future__ import annotations

from pathlib import Path

import pytest

from additional_slots import pathing
from additional_slots.config import AppConfig
from additional_slots.exceptions import ConfigError
from additional_slots.pathing import Paths
from additional_slots.util import POLICY_ABORT, POLICY_SKIP, SCHEMA_NAMED


def test_defaults_without_config_file(tmp_path: Path) -> None:
    paths = Paths(str(tmp_path / "mods"), data_dir=str(tmp_path / "data"))

    config = AppConfig(paths)

    assert config["slots"]["malformed_index"] == POLICY_ABORT
    assert config["slots"]["schema"] == SCHEMA_NAMED
    assert paths.baseline_file == paths.bundled_baseline_file
    assert paths.bundled_baseline_file.endswith("ui_chara_db.prc")
    assert paths.labels_file is None


def test_config_file_overrides_defaults(tmp_path: Path) -> None:
    cfg_path = tmp_path / "app.conf"
    cfg_path.write_text(
        "[slots]\nbaseline = /games/ui_chara_db.prc\nmalformed_index = skip\n",
        encoding="utf8",
    )
    paths = Paths(str(tmp_path / "mods"))

    config = AppConfig(paths, str(cfg_path))

    assert config["slots"]["malformed_index"] == POLICY_SKIP
    assert config["slots"]["schema"] == SCHEMA_NAMED
    assert paths.baseline_file == "/games/ui_chara_db.prc"


def test_missing_data_dir_is_not_created(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(pathing.platform, "system", lambda: "Linux")
    monkeypatch.setenv("HOME", str(tmp_path))

    config = AppConfig(Paths(str(tmp_path / "mods")))

    assert config.cfg_path == str(tmp_path / ".additional_slots" / "app.conf")
    assert not (tmp_path / ".additional_slots").exists()


@pytest.mark.parametrize(
    "content",
    [b"baseline = /games/ui_chara_db.prc\n", b"[slots\n", b"[slots]\nschema\n", b"[slots]\nlabels = \xff\xfe\n"],
)
def test_unreadable_config_file_is_rejected(tmp_path: Path, content: bytes) -> None:
    cfg_path = tmp_path / "app.conf"
    cfg_path.write_bytes(content)

    with pytest.raises(ConfigError) as exc_info:
        AppConfig(Paths(str(tmp_path / "mods")), str(cfg_path))

    assert exc_info.value.title == "Invalid Configuration"


@pytest.mark.parametrize("setting", ["malformed_index = ignore", "schema = guess"])
def test_invalid_choices_are_rejected(tmp_path: Path, setting: str) -> None:
    cfg_path = tmp_path / "app.conf"
    cfg_path.write_text(f"[slots]\n{setting}\n", encoding="utf8")

    with pytest.raises(ConfigError):
        AppConfig(Paths(str(tmp_path / "mods")), str(cfg_path))
