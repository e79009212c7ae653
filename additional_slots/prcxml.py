"""
Param patches and their XML form (.prcxml).

A patch mirrors the shape of the tree it applies to but only carries the leaves that changed,
plus the structs and lists leading to them. Struct children are keyed by hash and list children by index:

    <struct>
      <list hash="db_root">
        <struct index="3">
          <byte hash="color_num">8</byte>
        </struct>
      </list>
    </struct>
"""
__all__ = [

    "IncompatibleTreesError",
    "ListPatch",
    "generate_patch",
    "apply_patch",
    "write_xml",
    "read_xml",
]

import xml.etree.ElementTree as ET

from .param import *
from .prc import ParamFormatError

SCALAR_TAGS = {

    KIND_BOOL: "bool",
    KIND_I8: "sbyte",
    KIND_U8: "byte",
    KIND_I16: "short",
    KIND_U16: "ushort",
    KIND_I32: "int",
    KIND_U32: "uint",
    KIND_FLOAT: "float",
    KIND_HASH40: "hash40",
    KIND_STRING: "string",
}

TAG_KINDS = {tag: kind for kind, tag in SCALAR_TAGS.items()}


class IncompatibleTreesError(ValueError):
    """
    Two trees do not share the same shape so no patch can describe their difference.
    """


class ListPatch:
    """
    Changed list children keyed by their index in the original list.
    """

    kind = KIND_LIST

    def __init__(self, items=None):
        self.items = dict(items or {})

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(sorted(self.items.items()))

    def __eq__(self, other):
        if not isinstance(other, ListPatch):
            return NotImplemented

        return self.items == other.items

    def __repr__(self):
        return f"ListPatch({self.items!r})"


def _diff(original, modified, path):
    if type(original) is not type(modified):
        raise IncompatibleTreesError(f"{path}: {type(original).__name__} vs {type(modified).__name__}")

    if isinstance(original, ParamStruct):
        if set(original.keys()) != set(modified.keys()):
            raise IncompatibleTreesError(f"{path}: struct keys differ")

        entries = []
        for key_hash, child in original:
            child_patch = _diff(child, modified.get(key_hash), f"{path}/0x{key_hash:010x}")

            if child_patch is not None:
                entries.append((key_hash, child_patch))

        return ParamStruct(entries) if entries else None

    if isinstance(original, ParamList):
        if len(original) != len(modified):
            raise IncompatibleTreesError(f"{path}: list lengths differ ({len(original)} vs {len(modified)})")

        items = {}
        for index, (child, modified_child) in enumerate(zip(original, modified)):
            child_patch = _diff(child, modified_child, f"{path}[{index}]")

            if child_patch is not None:
                items[index] = child_patch

        return ListPatch(items) if items else None

    if original.kind != modified.kind:
        raise IncompatibleTreesError(f"{path}: param kind {original.kind} vs {modified.kind}")

    if original == modified:
        return None

    return clone(modified)


def generate_patch(original, modified):
    """
    Return the patch turning `original` into `modified`, or None when they are identical.
    """
    return _diff(original, modified, "")


def _apply_child(child, child_patch, path):
    """
    Apply `child_patch` to `child` and return the param to store back in the parent.
    """
    if isinstance(child_patch, ParamValue):
        if not isinstance(child, ParamValue) or child.kind != child_patch.kind:
            raise IncompatibleTreesError(f"{path}: patch value does not match the target param")

        return clone(child_patch)

    _apply(child, child_patch, path)
    return child


def _apply(target, patch, path):
    if isinstance(patch, ParamStruct):
        if not isinstance(target, ParamStruct):
            raise IncompatibleTreesError(f"{path}: expected a struct")

        for key_hash, child_patch in patch:
            child = target.get(key_hash)

            if child is None:
                raise IncompatibleTreesError(f"{path}: no entry 0x{key_hash:010x}")

            child_path = f"{path}/0x{key_hash:010x}"
            target[key_hash] = _apply_child(child, child_patch, child_path)

    elif isinstance(patch, ListPatch):
        if not isinstance(target, ParamList):
            raise IncompatibleTreesError(f"{path}: expected a list")

        for index, child_patch in patch:
            if not 0 <= index < len(target):
                raise IncompatibleTreesError(f"{path}: index {index} out of range")

            target[index] = _apply_child(target[index], child_patch, f"{path}[{index}]")

    else:
        raise IncompatibleTreesError(f"{path}: a patch must be a struct or a list")


def apply_patch(tree, patch):
    """
    Return a copy of `tree` with `patch` applied. The given tree is left untouched.
    """
    patched = clone(tree)

    if patch is not None:
        _apply(patched, patch, "")

    return patched


def _scalar_text(param, labels):
    if param.kind == KIND_BOOL:
        return "true" if param.value else "false"

    if param.kind == KIND_HASH40:
        return labels.label_of(param.value)

    if param.kind == KIND_FLOAT:
        return repr(param.value)

    return str(param.value)


def _to_element(param, labels):
    if isinstance(param, ParamStruct):
        element = ET.Element("struct")

        for key_hash, child in param:
            child_element = _to_element(child, labels)
            child_element.set("hash", labels.label_of(key_hash))
            element.append(child_element)

    elif isinstance(param, (ListPatch, ParamList)):
        element = ET.Element("list")
        children = param if isinstance(param, ListPatch) else enumerate(param)

        for index, child in children:
            child_element = _to_element(child, labels)
            child_element.set("index", str(index))
            element.append(child_element)

    else:
        element = ET.Element(SCALAR_TAGS[param.kind])
        element.text = _scalar_text(param, labels)

    return element


def write_xml(patch, stream, labels=None):
    """
    Write a patch as prcxml to a binary stream.
    """
    if labels is None:
        labels = Labels()

    tree = ET.ElementTree(_to_element(patch, labels))
    ET.indent(tree, space="  ")
    tree.write(stream, encoding="utf-8", xml_declaration=True)


def _from_element(element, labels):
    if element.tag == "struct":
        entries = []

        for child_element in element:
            label = child_element.get("hash")

            if label is None:
                raise ParamFormatError(f"Struct child <{child_element.tag}> has no hash attribute!")

            entries.append((labels.hash_of(label), _from_element(child_element, labels)))

        return ParamStruct(entries)

    if element.tag == "list":
        items = {}

        for child_element in element:
            index = child_element.get("index")

            if index is None:
                raise ParamFormatError(f"List child <{child_element.tag}> has no index attribute!")

            items[int(index)] = _from_element(child_element, labels)

        return ListPatch(items)

    if element.tag not in TAG_KINDS:
        raise ParamFormatError(f"Unknown prcxml tag <{element.tag}>!")

    kind = TAG_KINDS[element.tag]
    text = element.text or ""

    if kind == KIND_BOOL:
        return ParamValue(kind, text.strip().lower() in ("true", "1"))

    if kind == KIND_FLOAT:
        return ParamValue(kind, float(text))

    if kind == KIND_HASH40:
        return ParamValue(kind, labels.hash_of(text.strip()))

    if kind == KIND_STRING:
        return ParamValue(kind, text)

    return ParamValue(kind, int(text))


def read_xml(source, labels=None):
    """
    Read a prcxml patch from a path or a binary stream.
    """
    if labels is None:
        labels = Labels()

    root = ET.parse(source).getroot()

    if root.tag != "struct":
        raise ParamFormatError(f"prcxml root must be <struct>, got <{root.tag}>!")

    return _from_element(root, labels)
