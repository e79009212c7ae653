import os
import logging

from . import prcxml
from .exceptions import AppException, PatchWriteError

logger = logging.getLogger(__name__)


def export_patch(baseline, modded, paths, labels=None):
    """
    Write the difference between the baseline and modded trees to the prcxml patch file.
    Return the path written, or None when no record changed and nothing was written.
    """
    try:
        diff = prcxml.generate_patch(baseline, modded)

    except prcxml.IncompatibleTreesError as exc:
        raise AppException("Error Generating Patch", f"Baseline and modded trees do not match: {exc}")

    if diff is None:
        logger.info("No fighter with additional slots were found, nothing to write.")
        return None

    patch_dir = paths.patch_dir

    try:
        if not os.path.exists(patch_dir):
            os.makedirs(patch_dir)

        # The directory is left in place if the write below fails.
        with open(paths.patch_file, "wb") as patch_fp:
            prcxml.write_xml(diff, patch_fp, labels)

    except OSError as exc:
        raise PatchWriteError(f"Failed to create xml diff at {paths.patch_file}: {exc.strerror or exc}")

    logger.info("Successfully generated xml diff: %s", paths.patch_file)
    return paths.patch_file
