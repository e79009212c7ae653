from __future__ import annotations

from pathlib import Path

from additional_slots.param import (
    KIND_BOOL,
    KIND_HASH40,
    KIND_I8,
    KIND_STRING,
    KIND_U8,
    ParamList,
    ParamStruct,
    ParamValue,
    hash40,
)


def make_record(name: str, color_num: int = 8, disp_order: int = 0) -> ParamStruct:
    """Build a ui_chara_db record with the fields the tool cares about plus a few neighbours."""
    return ParamStruct(
        [
            ("ui_chara_id", ParamValue(KIND_HASH40, hash40(f"ui_chara_{name}"))),
            ("name_id", ParamValue(KIND_STRING, name)),
            ("fighter_kind", ParamValue(KIND_HASH40, hash40(f"fighter_kind_{name}"))),
            ("is_dlc", ParamValue(KIND_BOOL, False)),
            ("color_num", ParamValue(KIND_U8, color_num)),
            ("disp_order", ParamValue(KIND_I8, disp_order)),
        ]
    )


def make_chara_db(*records: ParamStruct) -> ParamStruct:
    return ParamStruct([("db_root", ParamList(list(records)))])


def make_costumes(mods_dir: Path, mod_name: str, character: str, *costumes: str, container: str = "body") -> Path:
    """Create empty costume folders for one character inside one mod."""
    container_path = mods_dir / mod_name / "fighter" / character / "model" / container
    container_path.mkdir(parents=True, exist_ok=True)
    for costume in costumes:
        (container_path / costume).mkdir()
    return container_path
