import os
import sys
import logging
import argparse
import traceback

from .version import VERSION
from .pathing import Paths
from .config import AppConfig
from .exceptions import AppError
from .generate import GenerateJob
from .util import *

logger = logging.getLogger("additional_slots")


def print_fighters_max_slot(max_slots):
    print("Here is each fighter affected with their new maximum slot:")

    for fighter, slot_count in iter_fighters(max_slots):
        print(f" {fighter} - {slot_count_to_costume_id(slot_count)}")

    print()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="additional_slots",
        description="Generate a ui_chara_db.prcxml patch that unlocks every costume slot used by your mods.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Write "(UI) Additional Slots/ui/param/database/ui_chara_db.prcxml" into the mods directory
  python -m additional_slots /path/to/mods

  # Also list the slot count found for each fighter
  python -m additional_slots /path/to/mods -v
        """
    )
    parser.add_argument("mods_dir", help="Path to the mods directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print each fighter's new maximum slot")
    parser.add_argument("--config", help="Path to an app.conf to use instead of the one in the user data directory")
    parser.add_argument("--baseline", help=f"Path to the {BASELINE_FILE_NAME} to diff against")
    parser.add_argument("--labels", help="Path to a param labels file (0x<hash>,<label> per line)")
    parser.add_argument("--skip-malformed", action="store_true",
                        help="Skip costume folders like 'cXX' instead of stopping on them")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    return parser.parse_args(argv)


def report_error(title, message, exc_info=None):
    logger.error("%s: %s", title, message)

    if exc_info and exc_info[0] is not None:
        logger.debug("".join(traceback.format_exception(*exc_info)))


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    paths = Paths(args.mods_dir)

    try:
        config = AppConfig(paths, args.config)

    except AppError as error:
        report_error(*error.get_details()[:2])
        return 1

    if args.baseline:
        config["slots"]["baseline"] = args.baseline

    if args.labels:
        config["slots"]["labels"] = args.labels

    if args.skip_malformed:
        config["slots"]["malformed_index"] = POLICY_SKIP

    if not os.path.isdir(args.mods_dir):
        report_error("Error Scanning Mods", f"{args.mods_dir} is not a directory!")
        return 1

    emulator = running_emulator()
    if emulator is not None:
        logger.warning("%s is running, the new slots show up the next time the game boots.", emulator)

    job = GenerateJob(paths, config, on_slots=print_fighters_max_slot if args.verbose else None)

    if not job.run():
        if job.error is not None:
            report_error(*job.error.get_details()[:2])

        else:
            report_error(*job.exc.get_details())

        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
