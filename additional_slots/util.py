__all__ = [

    # Constants
    "FIGHTER_DIR_NAME",
    "COSTUME_CONTAINERS",
    "COSTUME_PREFIX",
    "COSTUME_ID_FMT",
    "BASELINE_FILE_NAME",
    "PATCH_FILE_NAME",
    "PATCH_MOD_NAME",
    "PATCH_PATH_COMPONENTS",
    "EMULATOR_PROCESS_NAMES",
    "POLICY_ABORT",
    "POLICY_SKIP",
    "MALFORMED_POLICIES",
    "SCHEMA_NAMED",
    "SCHEMA_POSITIONAL",
    "SCHEMAS",

    # Functions
    "iter_fighters",
    "slot_count_to_costume_id",
    "parse_costume_index",
    "running_emulator",
]

import re

import psutil

FIGHTER_DIR_NAME = "fighter"

# Checked in order, the first one that exists holds the costume folders.
# Most fighters keep costumes in "body", the rest in "diver".
COSTUME_CONTAINERS = (("model", "body"), ("model", "diver"))

COSTUME_PREFIX = "c"
COSTUME_ID_FMT = "c{:02}"

BASELINE_FILE_NAME = "ui_chara_db.prc"
PATCH_FILE_NAME = "ui_chara_db.prcxml"
PATCH_MOD_NAME = "(UI) Additional Slots"
PATCH_PATH_COMPONENTS = (PATCH_MOD_NAME, "ui", "param", "database")

EMULATOR_PROCESS_NAMES = ("ryujinx", "yuzu", "suyu", "sudachi")

POLICY_ABORT = "abort"
POLICY_SKIP = "skip"
MALFORMED_POLICIES = (POLICY_ABORT, POLICY_SKIP)

SCHEMA_NAMED = "named"
SCHEMA_POSITIONAL = "positional"
SCHEMAS = (SCHEMA_NAMED, SCHEMA_POSITIONAL)

COSTUME_INDEX_RE = re.compile(r"[0-9]+")


def iter_fighters(max_slots):
    """
    Helper to iterate a slot requirement map sorted by fighter name.
    """
    yield from sorted(max_slots.items(), key=lambda item: item[0])


def slot_count_to_costume_id(slot_count):
    """
    Convert a slot count to the folder name of the last costume. We ensure it is always 2 digits.
    A slot count of 8 means costumes c00 through c07.
    """
    return COSTUME_ID_FMT.format(slot_count - 1)


def parse_costume_index(folder_name):
    """
    Return the costume index of a folder named "c<number>".
    Return None for names that do not start with the costume prefix at all.
    Raise ValueError for names that start with the prefix but are not followed by a number.
    """
    if not folder_name.startswith(COSTUME_PREFIX):
        return None

    suffix = folder_name[len(COSTUME_PREFIX):]
    if COSTUME_INDEX_RE.fullmatch(suffix) is None:
        raise ValueError(f"{folder_name!r} is not a costume folder name!")

    return int(suffix)


def running_emulator():
    """
    Helper to find a running Switch emulator.
    Param patches are only picked up when the game boots so a running game will not see the new slots yet.
    Returns the process name of the first emulator found, or None.
    """
    for proc in psutil.process_iter():
        try:
            proc_name = proc.name()

        # If we cannot get the process name just ignore it.
        except (psutil.AccessDenied, psutil.NoSuchProcess, psutil.ZombieProcess):
            continue

        if any(proc_name.lower().startswith(emulator) for emulator in EMULATOR_PROCESS_NAMES):
            return proc_name

    return None
