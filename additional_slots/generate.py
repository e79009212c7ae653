import logging

from .param import Labels
from .scan import scan_mods
from .char_info import resolve_aliases
from .schema import get_schema
from .patch import load_baseline, patch_tree
from .exporter import export_patch
from .work import Work, AppException

logger = logging.getLogger(__name__)


class GenerateJob(Work):
    """
    Scan the mods directory for costume slots and write the ui_chara_db patch that unlocks them.
    After `run()` the slot requirement map is available as `max_slots` and the written file as `patch_file`.
    """
    def __init__(self, paths, config, on_slots=None):
        Work.__init__(self)
        self.paths = paths
        self.config = config
        self.on_slots = on_slots

        self.max_slots = {}
        self.patch_file = None

    def _load_labels(self):
        labels = Labels()

        if self.paths.labels_file is not None:
            logger.debug("Loading param labels from %s", self.paths.labels_file)
            try:
                labels.load(self.paths.labels_file)

            except (OSError, ValueError) as exc:
                raise AppException("Error Loading Labels", f"Failed to read {self.paths.labels_file}: {exc}")

        return labels

    def work(self):
        settings = self.config["slots"]

        self.max_slots = scan_mods(self.paths.mods_dir, settings["malformed_index"])
        resolve_aliases(self.max_slots)

        if self.on_slots is not None:
            self.on_slots(self.max_slots)

        baseline = load_baseline(self.paths.baseline_file)
        modded = patch_tree(baseline, self.max_slots, get_schema(settings["schema"]))

        self.patch_file = export_patch(baseline, modded, self.paths, self._load_labels())
