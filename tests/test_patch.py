from __future__ import annotations

import struct
from pathlib import Path

import pytest

from additional_slots import prc
from additional_slots.exceptions import BaselineError
from additional_slots.param import (
    KIND_BOOL,
    KIND_LIST,
    KIND_STRING,
    KIND_STRUCT,
    KIND_U8,
    ParamStruct,
    ParamValue,
    hash40,
)
from additional_slots.patch import load_baseline, patch_tree
from additional_slots.prcxml import generate_patch
from additional_slots.schema import CharaDbSchema, PositionalCharaDbSchema, get_schema
from additional_slots.util import SCHEMA_NAMED, SCHEMA_POSITIONAL
from tests.builders import make_chara_db, make_record


def _slot_counts(tree: ParamStruct) -> dict:
    schema = CharaDbSchema()
    return {schema.get_name(record): schema.get_slot_count(record) for record in schema.iter_records(tree)}


def test_matching_record_gets_new_slot_count(chara_db: ParamStruct) -> None:
    modded = patch_tree(chara_db, {"mario": 8})

    assert _slot_counts(modded)["mario"] == 8
    assert generate_patch(chara_db, modded) is not None


def test_baseline_is_not_modified(chara_db: ParamStruct) -> None:
    patch_tree(chara_db, {"mario": 8, "luigi": 12})

    assert _slot_counts(chara_db)["mario"] == 1
    assert _slot_counts(chara_db)["luigi"] == 8


def test_only_slot_count_of_matching_record_changes(chara_db: ParamStruct) -> None:
    modded = patch_tree(chara_db, {"mario": 8})

    original_records = chara_db["db_root"].items
    modded_records = modded["db_root"].items

    assert modded_records[1:] == original_records[1:]
    for (key_hash, original), (_, changed) in zip(original_records[0], modded_records[0]):
        if key_hash == hash40("color_num"):
            assert changed == ParamValue(KIND_U8, 8)
        else:
            assert changed == original


def test_no_matching_names_leaves_tree_identical(chara_db: ParamStruct) -> None:
    modded = patch_tree(chara_db, {"ganon": 16, "kirby": 10})

    assert modded == chara_db
    assert modded is not chara_db
    assert generate_patch(chara_db, modded) is None


def test_slot_count_must_fit_in_a_byte(chara_db: ParamStruct) -> None:
    with pytest.raises(ValueError):
        patch_tree(chara_db, {"mario": 256})


def test_records_without_slot_field_are_skipped() -> None:
    stripped = make_record("mario", color_num=1)
    stripped.entries = [entry for entry in stripped.entries if entry[0] != hash40("color_num")]
    tree = make_chara_db(stripped, make_record("luigi", color_num=1))

    modded = patch_tree(tree, {"mario": 8, "luigi": 8})

    assert modded["db_root"][0] == stripped
    assert modded["db_root"][1]["color_num"] == ParamValue(KIND_U8, 8)


def test_positional_schema_uses_fixed_field_offsets() -> None:
    record = ParamStruct([(f"field_{index}", ParamValue(KIND_U8, 0)) for index in range(40)])
    record.entries[1] = (record.entries[1][0], ParamValue(KIND_STRING, "mario"))
    tree = make_chara_db(record)

    modded = patch_tree(tree, {"mario": 9}, PositionalCharaDbSchema())

    assert modded["db_root"][0].entries[33][1] == ParamValue(KIND_U8, 9)
    assert modded["db_root"][0].entries[32][1] == ParamValue(KIND_U8, 0)


def test_get_schema() -> None:
    assert type(get_schema(SCHEMA_NAMED)) is CharaDbSchema
    assert type(get_schema(SCHEMA_POSITIONAL)) is PositionalCharaDbSchema


def test_load_baseline_reads_prc(baseline_file: Path, chara_db: ParamStruct) -> None:
    assert load_baseline(str(baseline_file)) == chara_db


def test_load_baseline_missing_file(tmp_path: Path) -> None:
    with pytest.raises(BaselineError) as exc_info:
        load_baseline(str(tmp_path / "ui_chara_db.prc"))

    assert "missing ui_chara_db.prc file" in exc_info.value.message


def test_load_baseline_corrupt_file(tmp_path: Path) -> None:
    corrupt = tmp_path / "ui_chara_db.prc"
    corrupt.write_bytes(b"not a param file at all")

    with pytest.raises(BaselineError) as exc_info:
        load_baseline(str(corrupt))

    assert isinstance(exc_info.value.exc_info[1], prc.ParamFormatError)


def test_load_baseline_list_containing_itself(tmp_path: Path) -> None:
    # root struct -> list at offset 9 -> child offset 0 back at the list
    corrupt = tmp_path / "ui_chara_db.prc"
    corrupt.write_bytes(
        b"paracobn"
        + struct.pack("<IIQII", 8, 8, 0, 0, 9)
        + struct.pack("<BII", KIND_STRUCT, 1, 0)
        + struct.pack("<BII", KIND_LIST, 1, 0)
    )

    with pytest.raises(BaselineError) as exc_info:
        load_baseline(str(corrupt))

    assert "contains itself" in exc_info.value.message


def test_load_baseline_nested_too_deeply(tmp_path: Path) -> None:
    depth = 5000
    data = struct.pack("<BII", KIND_STRUCT, 1, 0)
    data += struct.pack("<BII", KIND_LIST, 1, 9) * depth
    data += struct.pack("<BB", KIND_BOOL, 1)

    corrupt = tmp_path / "ui_chara_db.prc"
    corrupt.write_bytes(b"paracobn" + struct.pack("<IIQII", 8, 8, 0, 0, 9) + data)

    with pytest.raises(BaselineError) as exc_info:
        load_baseline(str(corrupt))

    assert "nested too deeply" in exc_info.value.message
