__all__ = [

    # Param kinds
    "KIND_BOOL",
    "KIND_I8",
    "KIND_U8",
    "KIND_I16",
    "KIND_U16",
    "KIND_I32",
    "KIND_U32",
    "KIND_FLOAT",
    "KIND_HASH40",
    "KIND_STRING",
    "KIND_LIST",
    "KIND_STRUCT",
    "SCALAR_KINDS",
    "INT_RANGES",

    # Types
    "ParamValue",
    "ParamList",
    "ParamStruct",
    "Labels",

    # Functions
    "hash40",
    "clone",
]

import copy
import struct
import zlib

# Type codes as they appear in the binary format.
KIND_BOOL = 1
KIND_I8 = 2
KIND_U8 = 3
KIND_I16 = 4
KIND_U16 = 5
KIND_I32 = 6
KIND_U32 = 7
KIND_FLOAT = 8
KIND_HASH40 = 9
KIND_STRING = 10
KIND_LIST = 11
KIND_STRUCT = 12

SCALAR_KINDS = (
    KIND_BOOL,
    KIND_I8,
    KIND_U8,
    KIND_I16,
    KIND_U16,
    KIND_I32,
    KIND_U32,
    KIND_FLOAT,
    KIND_HASH40,
    KIND_STRING,
)

INT_RANGES = {

    KIND_I8: (-0x80, 0x7F),
    KIND_U8: (0, 0xFF),
    KIND_I16: (-0x8000, 0x7FFF),
    KIND_U16: (0, 0xFFFF),
    KIND_I32: (-0x80000000, 0x7FFFFFFF),
    KIND_U32: (0, 0xFFFFFFFF),
    KIND_HASH40: (0, 0xFFFFFFFFFF),
}

FLOAT32 = struct.Struct("<f")


def hash40(text):
    """
    Compute the 40 bit hash used for param keys and hash40 values.
    The low 32 bits are the CRC32 of the text and the high 8 bits are its length.
    """
    data = text.encode("utf-8")
    return ((len(data) & 0xFF) << 32) | zlib.crc32(data)


def clone(param):
    """
    Return an independent deep copy of a param tree.
    """
    return copy.deepcopy(param)


def to_hash(key):
    """
    Keys may be given as labels or as raw hashes.
    """
    if isinstance(key, str):
        return hash40(key)

    return key


class ParamValue:
    """
    A scalar param. Integer kinds are range checked against their width on construction.
    """
    def __init__(self, kind, value):
        if kind not in SCALAR_KINDS:
            raise ValueError(f"Param kind {kind} is not a scalar kind!")

        if kind in INT_RANGES:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Param kind {kind} requires an integer value, got {value!r}!")

            low, high = INT_RANGES[kind]
            if not low <= value <= high:
                raise ValueError(f"Value {value} out of range [{low}, {high}] for param kind {kind}!")

        elif kind == KIND_BOOL:
            value = bool(value)

        elif kind == KIND_FLOAT:
            value = float(value)

            try:
                FLOAT32.pack(value)

            except OverflowError:
                raise ValueError(f"Value {value} does not fit a 32 bit float!")

        elif kind == KIND_STRING and not isinstance(value, str):
            raise ValueError(f"String param requires a str value, got {value!r}!")

        self.kind = kind
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, ParamValue):
            return NotImplemented

        if self.kind != other.kind:
            return False

        # Floats are compared as their stored 32 bit pattern so NaN equals itself.
        if self.kind == KIND_FLOAT:
            return FLOAT32.pack(self.value) == FLOAT32.pack(other.value)

        return self.value == other.value

    def __repr__(self):
        return f"ParamValue({self.kind}, {self.value!r})"


class ParamList:
    """
    An ordered list of params.
    """

    kind = KIND_LIST

    def __init__(self, items=None):
        self.items = list(items or [])

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __setitem__(self, index, param):
        self.items[index] = param

    def __eq__(self, other):
        if not isinstance(other, ParamList):
            return NotImplemented

        return self.items == other.items

    def __repr__(self):
        return f"ParamList({self.items!r})"


class ParamStruct:
    """
    An ordered collection of (hash, param) entries.
    Lookups accept either a label or the raw 40 bit hash.
    """

    kind = KIND_STRUCT

    def __init__(self, entries=None):
        self.entries = [(to_hash(key), param) for key, param in (entries or [])]

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, key):
        key_hash = to_hash(key)
        return any(entry_hash == key_hash for entry_hash, _ in self.entries)

    def keys(self):
        return [entry_hash for entry_hash, _ in self.entries]

    def get(self, key, default=None):
        key_hash = to_hash(key)

        for entry_hash, param in self.entries:
            if entry_hash == key_hash:
                return param

        return default

    def __getitem__(self, key):
        param = self.get(key)

        if param is None:
            raise KeyError(key)

        return param

    def __setitem__(self, key, param):
        key_hash = to_hash(key)

        for index, (entry_hash, _) in enumerate(self.entries):
            if entry_hash == key_hash:
                self.entries[index] = (entry_hash, param)
                return

        self.entries.append((key_hash, param))

    def __eq__(self, other):
        if not isinstance(other, ParamStruct):
            return NotImplemented

        return self.entries == other.entries

    def __repr__(self):
        return f"ParamStruct({self.entries!r})"


# Names this tool reads or writes. Anything else is shown as a hex hash unless a labels file is loaded.
DEFAULT_LABELS = (

    "db_root",
    "ui_chara_id",
    "name_id",
    "fighter_kind",
    "fighter_kind_corps",
    "ui_series_id",
    "fighter_type",
    "alt_chara_id",
    "shop_item_tag",
    "is_dlc",
    "is_patch",
    "color_num",
    "disp_order",
    "c00_index",
    "c01_index",
    "c02_index",
    "c03_index",
    "c04_index",
    "c05_index",
    "c06_index",
    "c07_index",
    "n00_index",
    "n01_index",
    "n02_index",
    "n03_index",
    "n04_index",
    "n05_index",
    "n06_index",
    "n07_index",
)


class Labels:
    """
    Two-way table between 40 bit hashes and their readable labels.
    """
    def __init__(self, names=DEFAULT_LABELS):
        self.hash_to_label = {}
        self.label_to_hash = {}

        for name in names:
            self.add(name)

    def add(self, label, label_hash=None):
        if label_hash is None:
            label_hash = hash40(label)

        self.hash_to_label[label_hash] = label
        self.label_to_hash[label] = label_hash

    def load(self, labels_path):
        """
        Load a labels file with one "0x<hash>,<label>" pair per line.
        Blank lines and lines without a comma are ignored.
        """
        with open(labels_path, "r", encoding="utf-8") as labels_fp:
            for line in labels_fp:
                line = line.strip()

                if not line or "," not in line:
                    continue

                hash_text, label = line.split(",", 1)
                self.add(label, int(hash_text, 16))

    def label_of(self, label_hash):
        """
        Return the label for a hash, or the hash formatted as hex if we do not know it.
        """
        return self.hash_to_label.get(label_hash, f"0x{label_hash:010x}")

    def hash_of(self, label):
        """
        Return the hash of a label. Hex strings are taken as raw hashes.
        """
        if label in self.label_to_hash:
            return self.label_to_hash[label]

        if label.startswith("0x"):
            try:
                return int(label, 16)

            except ValueError:
                pass

        return hash40(label)
