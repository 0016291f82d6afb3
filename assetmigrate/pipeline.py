import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .classifier import AssetRules
from .copier import AssetCopier
from .default_rules import DEFAULT_DESTINATION
from .errors import DiscoveryWarning
from .executor import ExecutionController
from .journal import ActionJournal
from .models import DestinationLayout, MigrationReport, PathKind, SelectionReason
from .renamer import RenameNormalizer
from .scanner import AssetLocator, SourceTree
from .selector import AudioSelector
from .sources import SourceCheckout
from .utils import check_free_space, tree_size, validate_layout

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationOptions:
    source: Optional[str] = None  # local path or git URL; None = default repository
    destination: str = DEFAULT_DESTINATION
    forced_audio: Optional[str] = None
    rename: bool = True
    dry_run: bool = False
    rules_path: Optional[str] = None
    keep_clone: bool = False
    journal_path: Optional[str] = None


class AssetMigrator:
    """Locate -> select -> copy -> normalize, in that order, under one ExecutionController."""

    def __init__(self, options: MigrationOptions):
        self.options = options
        self.rules = AssetRules(Path(options.rules_path).expanduser() if options.rules_path else None)
        self.layout = DestinationLayout.under(Path(options.destination).expanduser().resolve())
        self.controller = ExecutionController(dry_run=options.dry_run)

    def _warn(self, report: MigrationReport, message: str) -> None:
        log.warning(message)
        report.warnings.append(DiscoveryWarning(message))

    def run(self) -> MigrationReport:
        opts = self.options
        report = MigrationReport(layout=self.layout, dry_run=opts.dry_run)
        if opts.dry_run:
            log.info("Dry run: nothing will be modified")

        with SourceCheckout(opts.source, keep_clone=opts.keep_clone) as source_root:
            log.info("Source located at %s", source_root)
            locator = AssetLocator(SourceTree(source_root), self.rules)

            report.image_dirs = locator.locate_image_directories()
            if not report.image_dirs:
                self._warn(report, f"No images found in {source_root}")

            forced = Path(opts.forced_audio).expanduser() if opts.forced_audio else None
            candidates = [] if forced is not None else locator.locate_audio_files()
            report.selection = AudioSelector(self.rules).select(candidates, forced)
            if report.selection.reason is SelectionReason.NONE_FOUND:
                self._warn(report, f"No audio files found in {source_root}")

            validate_layout(report.image_dirs, self.layout.images_dir)
            to_copy: List[Path] = list(report.image_dirs)
            if report.selection.chosen is not None:
                to_copy.append(report.selection.chosen)
            check_free_space(self.layout.root, tree_size(to_copy))

            copier = AssetCopier(self.controller, self.rules)
            copier.copy_assets(report.image_dirs, report.selection, self.layout)
            if report.selection.chosen is not None:
                report.audio_target = copier.audio_target(report.selection.chosen, self.layout)

        if opts.rename:
            report.renames = RenameNormalizer(self.controller).normalize(self.layout.roots())
            if report.audio_target is not None:
                for plan in report.renames:
                    if plan.entry.path == report.audio_target:
                        report.audio_target = plan.target
        else:
            log.info("Space renaming disabled")

        report.actions = list(self.controller.actions)
        for d in self.layout.roots():
            report.file_counts[d] = sum(
                1 for _, kind in self.controller.walk(d) if kind is PathKind.FILE
            )

        if opts.journal_path and not opts.dry_run:
            ActionJournal(Path(opts.journal_path).expanduser()).write(report.actions)
        return report
