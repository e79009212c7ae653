import os
import logging

from .exceptions import ScanError, MalformedCostumeError
from .util import *

logger = logging.getLogger(__name__)


def _listdir(dir_path):
    """
    List a directory, turning OS errors into a ScanError so the whole scan is aborted.
    """
    try:
        return os.listdir(dir_path)

    except OSError as exc:
        raise ScanError(f"Failed to read directory {dir_path}: {exc.strerror or exc}")


def get_costume_container(character_path):
    """
    Return the directory holding the costume folders of a fighter, or None if it has none.
    """
    for path_pcs in COSTUME_CONTAINERS:
        container_path = os.path.join(character_path, *path_pcs)

        if os.path.isdir(container_path):
            return container_path

    return None


def _record_slot(max_slots, character, slot_count):
    """
    Keep the largest slot count seen for a character.
    """
    if slot_count > max_slots.get(character, 0):
        max_slots[character] = slot_count


def scan_costumes(container_path, policy=POLICY_ABORT):
    """
    Yield the slot count each costume folder in `container_path` asks for.
    A folder named c07 means the character needs at least 8 slots.
    """
    for folder_name in _listdir(container_path):
        costume_path = os.path.join(container_path, folder_name)

        if not os.path.isdir(costume_path):
            continue

        try:
            costume_index = parse_costume_index(folder_name)

        except ValueError:
            if policy == POLICY_SKIP:
                logger.warning("Skipping costume folder with an invalid name: %s", costume_path)
                continue

            raise MalformedCostumeError(costume_path)

        if costume_index is not None:
            yield costume_index + 1


def scan_fighter_dir(fighter_path, max_slots, policy=POLICY_ABORT):
    """
    Update `max_slots` with the costumes of every character in one mod's fighter directory.
    """
    for character in _listdir(fighter_path):
        character_path = os.path.join(fighter_path, character)

        if not os.path.isdir(character_path):
            continue

        container_path = get_costume_container(character_path)
        if container_path is None:
            continue

        for slot_count in scan_costumes(container_path, policy):
            _record_slot(max_slots, character, slot_count)


def scan_mods(mods_dir, policy=POLICY_ABORT, max_slots=None):
    """
    Walk every mod in `mods_dir` and return the number of costume slots each character needs.
    The result is the maximum across all mods, so a mod with fewer costumes never lowers it.
    A given `max_slots` is only updated once every mod was read.
    """
    found = dict(max_slots or {})

    for mod_name in _listdir(mods_dir):
        fighter_path = os.path.join(mods_dir, mod_name, FIGHTER_DIR_NAME)

        if os.path.isdir(fighter_path):
            logger.debug("Scanning %s", mod_name)
            scan_fighter_dir(fighter_path, found, policy)

    if max_slots is None:
        return found

    max_slots.update(found)
    return max_slots
