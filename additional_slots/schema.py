"""
Field access for ui_chara_db records.

The patcher only needs to find the character records, read their name and write their slot count.
Keeping that knowledge here means a change in the param layout only touches this module.
"""
from .param import *
from .util import *

DB_ROOT = "db_root"
NAME_FIELD = "name_id"
SLOT_COUNT_FIELD = "color_num"

# Field positions inside a record for the ui_chara_db layout that predates labels being available.
NAME_FIELD_INDEX = 1
SLOT_COUNT_FIELD_INDEX = 33


class CharaDbSchema:
    """
    Locate record fields by their hashed names.
    """
    def __init__(self, db_root=DB_ROOT, name_field=NAME_FIELD, slot_count_field=SLOT_COUNT_FIELD):
        self.db_root = db_root
        self.name_field = name_field
        self.slot_count_field = slot_count_field

    def iter_records(self, root):
        """
        Yield every character record of the database.
        List items that are not structs with a slot count field are skipped.
        """
        db_root = root.get(self.db_root)

        if not isinstance(db_root, ParamList):
            return

        for record in db_root:
            if isinstance(record, ParamStruct) and self.slot_count_field in record:
                yield record

    def get_name(self, record):
        name = record.get(self.name_field)

        if isinstance(name, ParamValue) and name.kind == KIND_STRING:
            return name.value

        return None

    def get_slot_count(self, record):
        return record[self.slot_count_field].value

    def set_slot_count(self, record, slot_count):
        record[self.slot_count_field] = ParamValue(KIND_U8, slot_count)


class PositionalCharaDbSchema(CharaDbSchema):
    """
    Locate record fields by their position, for param files whose field hashes we cannot rely on.
    The database list is the first entry of the root struct.
    """
    def __init__(self, name_index=NAME_FIELD_INDEX, slot_count_index=SLOT_COUNT_FIELD_INDEX):
        CharaDbSchema.__init__(self)
        self.name_index = name_index
        self.slot_count_index = slot_count_index

    def iter_records(self, root):
        if not len(root):
            return

        _, db_root = root.entries[0]

        if not isinstance(db_root, ParamList):
            return

        for record in db_root:
            if isinstance(record, ParamStruct) and len(record) > max(self.name_index, self.slot_count_index):
                yield record

    def get_name(self, record):
        _, name = record.entries[self.name_index]

        if isinstance(name, ParamValue) and name.kind == KIND_STRING:
            return name.value

        return None

    def get_slot_count(self, record):
        _, slot_count = record.entries[self.slot_count_index]
        return slot_count.value

    def set_slot_count(self, record, slot_count):
        key_hash, _ = record.entries[self.slot_count_index]
        record.entries[self.slot_count_index] = (key_hash, ParamValue(KIND_U8, slot_count))


def get_schema(schema_name):
    """
    Return the record schema for a config schema name.
    """
    if schema_name == SCHEMA_POSITIONAL:
        return PositionalCharaDbSchema()

    return CharaDbSchema()
