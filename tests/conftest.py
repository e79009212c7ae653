from __future__ import annotations

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from additional_slots import prc
from additional_slots.param import ParamStruct
from tests.builders import make_chara_db, make_record


@pytest.fixture
def chara_db() -> ParamStruct:
    return make_chara_db(
        make_record("mario", color_num=1, disp_order=0),
        make_record("luigi", color_num=8, disp_order=1),
        make_record("element", color_num=8, disp_order=2),
        make_record("eflame_first", color_num=8, disp_order=3),
        make_record("elight_first", color_num=8, disp_order=4),
        make_record("eflame_only", color_num=8, disp_order=5),
        make_record("elight_only", color_num=8, disp_order=6),
    )


@pytest.fixture
def baseline_file(tmp_path: Path, chara_db: ParamStruct) -> Path:
    path = tmp_path / "ui_chara_db.prc"
    path.write_bytes(prc.write_bytes(chara_db))
    return path


@pytest.fixture
def mods_dir(tmp_path: Path) -> Path:
    path = tmp_path / "mods"
    path.mkdir()
    return path
