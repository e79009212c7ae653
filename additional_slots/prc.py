"""
Reader and writer for the binary param container format (.prc).

Layout, all little endian:

- magic "paracobn"
- u32 byte size of the hash table
- u32 byte size of the ref table
- hash table: u64 hash40 values
- ref table: struct entry tables and NUL terminated strings
- the root param, which is always a struct

Each param starts with its one byte kind. Hash40 values are stored as an index into the hash table,
strings as an offset into the ref table. Lists store their child offsets relative to the list start.
Structs store an offset to a table of (hash index, child offset from struct start) pairs sorted by hash.
"""
__all__ = [

    "MAGIC",
    "ParamFormatError",
    "read_bytes",
    "read_stream",
    "read_file",
    "write_bytes",
    "write_stream",
]

import struct

from .param import *

MAGIC = b"paracobn"

HEADER = struct.Struct("<8sII")

SCALAR_FORMATS = {

    KIND_BOOL: "<B",
    KIND_I8: "<b",
    KIND_U8: "<B",
    KIND_I16: "<h",
    KIND_U16: "<H",
    KIND_I32: "<i",
    KIND_U32: "<I",
    KIND_FLOAT: "<f",
}


class ParamFormatError(ValueError):
    """
    The data is not a valid param container.
    """


class _Reader:
    def __init__(self, data):
        self.data = data

        if len(data) < HEADER.size:
            raise ParamFormatError("File too small to be a param container!")

        magic, hash_size, ref_size = HEADER.unpack_from(data, 0)
        if magic != MAGIC:
            raise ParamFormatError(f"Invalid magic {magic!r}, expected {MAGIC!r}!")

        if hash_size % 8:
            raise ParamFormatError(f"Hash table size {hash_size} is not a multiple of 8!")

        self.hash_start = HEADER.size
        self.ref_start = self.hash_start + hash_size
        self.data_start = self.ref_start + ref_size

        if self.data_start > len(data):
            raise ParamFormatError("Hash and ref tables run past the end of the file!")

        self.hashes = self._unpack(f"<{hash_size // 8}Q", self.hash_start)
        self.active = set()

    def _unpack(self, fmt, offset):
        try:
            return struct.unpack_from(fmt, self.data, offset)

        except struct.error as exc:
            raise ParamFormatError(f"Truncated param data at offset 0x{offset:x}!") from exc

    def _lookup_hash(self, index):
        if index >= len(self.hashes):
            raise ParamFormatError(f"Hash index {index} out of range!")

        return self.hashes[index]

    def _read_string(self, ref_offset):
        start = self.ref_start + ref_offset
        end = self.data.find(b"\0", start, self.data_start)

        if end == -1:
            raise ParamFormatError(f"Unterminated string at ref offset 0x{ref_offset:x}!")

        try:
            return self.data[start:end].decode("utf-8")

        except UnicodeDecodeError as exc:
            raise ParamFormatError(f"Invalid string at ref offset 0x{ref_offset:x}!") from exc

    def read_param(self, offset):
        kind, = self._unpack("<B", offset)
        payload = offset + 1

        if kind in SCALAR_FORMATS:
            value, = self._unpack(SCALAR_FORMATS[kind], payload)
            return ParamValue(kind, value)

        if kind == KIND_HASH40:
            index, = self._unpack("<I", payload)
            return ParamValue(kind, self._lookup_hash(index))

        if kind == KIND_STRING:
            ref_offset, = self._unpack("<I", payload)
            return ParamValue(kind, self._read_string(ref_offset))

        if kind not in (KIND_LIST, KIND_STRUCT):
            raise ParamFormatError(f"Unknown param kind {kind} at offset 0x{offset:x}!")

        # A list or struct may not contain itself.
        if offset in self.active:
            raise ParamFormatError(f"Param at offset 0x{offset:x} contains itself!")

        self.active.add(offset)
        try:
            if kind == KIND_LIST:
                return self._read_list(offset, payload)

            return self._read_struct(offset, payload)

        finally:
            self.active.discard(offset)

    def _read_list(self, offset, payload):
        count, = self._unpack("<I", payload)
        child_offsets = self._unpack(f"<{count}I", payload + 4)
        return ParamList([self.read_param(offset + child_offset) for child_offset in child_offsets])

    def _read_struct(self, offset, payload):
        count, ref_offset = self._unpack("<II", payload)
        pairs = self._unpack(f"<{count * 2}I", self.ref_start + ref_offset)

        # The entry table is sorted by hash. Restore the order the children were laid out in.
        children = sorted(zip(pairs[1::2], pairs[0::2]))

        entries = []
        for child_offset, hash_index in children:
            entries.append((self._lookup_hash(hash_index), self.read_param(offset + child_offset)))

        return ParamStruct(entries)


def read_bytes(data):
    """
    Parse a param container and return its root struct.
    """
    reader = _Reader(bytes(data))

    try:
        root = reader.read_param(reader.data_start)

    except RecursionError as exc:
        raise ParamFormatError("Params are nested too deeply!") from exc

    if not isinstance(root, ParamStruct):
        raise ParamFormatError("Root param is not a struct!")

    return root


def read_stream(stream):
    return read_bytes(stream.read())


def read_file(prc_path):
    with open(prc_path, "rb") as prc_fp:
        return read_stream(prc_fp)


class _Writer:
    def __init__(self):
        # Hash index 0 is conventionally the zero hash.
        self.hashes = [0]
        self.hash_indices = {0: 0}
        self.ref_table = bytearray()
        self.string_offsets = {}

    def _index_hash(self, value):
        if value not in self.hash_indices:
            self.hash_indices[value] = len(self.hashes)
            self.hashes.append(value)

        return self.hash_indices[value]

    def _string_offset(self, text):
        if text not in self.string_offsets:
            self.string_offsets[text] = len(self.ref_table)
            self.ref_table += text.encode("utf-8") + b"\0"

        return self.string_offsets[text]

    def write_param(self, param, out):
        start = len(out)

        if isinstance(param, ParamStruct):
            out += struct.pack("<BII", KIND_STRUCT, len(param), 0)

            child_refs = []
            for key_hash, child in param:
                child_refs.append((key_hash, len(out) - start))
                self.write_param(child, out)

            child_refs.sort()
            ref_offset = len(self.ref_table)

            for key_hash, child_offset in child_refs:
                self.ref_table += struct.pack("<II", self._index_hash(key_hash), child_offset)

            struct.pack_into("<I", out, start + 5, ref_offset)

        elif isinstance(param, ParamList):
            out += struct.pack("<BI", KIND_LIST, len(param))
            table_start = len(out)
            out += bytes(4 * len(param))

            for index, child in enumerate(param):
                struct.pack_into("<I", out, table_start + 4 * index, len(out) - start)
                self.write_param(child, out)

        elif param.kind in SCALAR_FORMATS:
            value = int(param.value) if param.kind == KIND_BOOL else param.value
            out += struct.pack("<B", param.kind) + struct.pack(SCALAR_FORMATS[param.kind], value)

        elif param.kind == KIND_HASH40:
            out += struct.pack("<BI", KIND_HASH40, self._index_hash(param.value))

        elif param.kind == KIND_STRING:
            out += struct.pack("<BI", KIND_STRING, self._string_offset(param.value))

        else:
            raise ParamFormatError(f"Cannot write param of kind {param.kind}!")


def write_bytes(root):
    """
    Serialize a root struct to a param container.
    """
    if not isinstance(root, ParamStruct):
        raise ParamFormatError("Root param must be a struct!")

    writer = _Writer()
    param_data = bytearray()
    writer.write_param(root, param_data)

    hash_table = struct.pack(f"<{len(writer.hashes)}Q", *writer.hashes)
    header = HEADER.pack(MAGIC, len(hash_table), len(writer.ref_table))

    return header + hash_table + bytes(writer.ref_table) + bytes(param_data)


def write_stream(root, stream):
    stream.write(write_bytes(root))
