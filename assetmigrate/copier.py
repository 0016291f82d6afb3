import logging
from pathlib import Path
from typing import List, Sequence

from .classifier import AssetRules
from .default_rules import IGNORED_NAMES
from .executor import ExecutionController
from .models import ActionRecord, DestinationLayout, SelectionResult
from .utils import walk_tree

log = logging.getLogger(__name__)


class AssetCopier:
    """Copies image directories and the selected audio file into a DestinationLayout.

    Additive only: existing destination content is never deleted, files with
    the same relative path are overwritten (last writer wins).
    """

    def __init__(self, controller: ExecutionController, rules: AssetRules | None = None):
        self.controller = controller
        self.rules = rules or AssetRules()

    def audio_target(self, audio: Path, layout: DestinationLayout) -> Path:
        # Extension kept verbatim, case included
        return layout.audio_dir / f"{self.rules.audio_name}{audio.suffix}"

    def prepare(self, layout: DestinationLayout) -> List[ActionRecord]:
        records: List[ActionRecord] = []
        for d in layout.roots():
            rec = self.controller.make_dirs(d)
            if rec is not None:
                records.append(rec)
        return records

    def copy_tree(self, src_dir: Path, dest_dir: Path) -> List[ActionRecord]:
        records: List[ActionRecord] = []
        for base, dirnames, filenames in walk_tree(src_dir):
            kept = sorted(d for d in dirnames if d not in IGNORED_NAMES)
            # Symlinked directories are carried over as links, not descended into.
            links = [d for d in kept if (base / d).is_symlink()]
            dirnames[:] = [d for d in kept if d not in links]
            target = dest_dir / base.relative_to(src_dir)
            rec = self.controller.make_dirs(target)
            if rec is not None:
                records.append(rec)
            for name in sorted(filenames):
                if name in IGNORED_NAMES:
                    continue
                rec = self.controller.copy_file(base / name, target / name)
                if rec is not None:
                    records.append(rec)
            for name in links:
                records.append(self.controller.copy_link(base / name, target / name))
        return records

    def copy_assets(
        self,
        image_dirs: Sequence[Path],
        selection: SelectionResult,
        layout: DestinationLayout,
    ) -> List[ActionRecord]:
        records = self.prepare(layout)

        for src in image_dirs:
            log.info("Copying images from %s to %s", src, layout.images_dir)
            records.extend(self.copy_tree(src, layout.images_dir))

        if selection.chosen is not None:
            target = self.audio_target(selection.chosen, layout)
            log.info("Copying audio to %s", target)
            rec = self.controller.copy_file(selection.chosen, target)
            if rec is not None:
                records.append(rec)

        return records
