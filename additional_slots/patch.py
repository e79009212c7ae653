import os
import logging

from . import prc
from .param import clone
from .schema import CharaDbSchema
from .exceptions import BaselineError
from .util import *

logger = logging.getLogger(__name__)


def load_baseline(baseline_path):
    """
    Read the baseline ui_chara_db.prc the patch is computed against.
    """
    if not os.path.isfile(baseline_path):
        raise BaselineError(f"missing {BASELINE_FILE_NAME} file ({baseline_path})")

    try:
        return prc.read_file(baseline_path)

    except (OSError, prc.ParamFormatError) as exc:
        raise BaselineError(f"Failed to read {baseline_path}: {exc}")


def patch_tree(baseline, max_slots, schema=None):
    """
    Return a copy of `baseline` where every record named in `max_slots` has its slot count replaced.
    The baseline itself is never modified. Slot counts must fit the unsigned byte field.
    """
    if schema is None:
        schema = CharaDbSchema()

    modded = clone(baseline)

    for record in schema.iter_records(modded):
        name = schema.get_name(record)

        if name in max_slots:
            logger.debug("Setting %s slot count %d -> %d", name, schema.get_slot_count(record), max_slots[name])
            schema.set_slot_count(record, max_slots[name])

    return modded
