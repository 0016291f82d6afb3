import logging
from pathlib import Path
from typing import Iterable, List, Set

from .executor import ExecutionController
from .models import PathKind, RenameEntry, RenamePlan
from .utils import normalized_name, unique_path

log = logging.getLogger(__name__)


class RenameNormalizer:
    """Replaces spaces with underscores in every name below the given roots.

    Entries are captured once, before any rename, and processed deepest first.
    Each rename only touches the entry's own name inside its (still original)
    parent; the parent gets its turn later, so the final path equals the
    original path with every space substituted.
    """

    def __init__(self, controller: ExecutionController):
        self.controller = controller

    def enumerate(self, root: Path) -> List[RenameEntry]:
        entries = [
            RenameEntry(path=p, depth=len(p.relative_to(root).parts), kind=kind)
            for p, kind in self.controller.walk(root)
            if " " in p.name
        ]
        # Deepest first, path order among equals.
        entries.sort(key=lambda e: str(e.path))
        entries.sort(key=lambda e: e.depth, reverse=True)
        return entries

    def plan_entry(self, entry: RenameEntry, taken: Set[Path]) -> RenamePlan:
        naive = entry.path.with_name(normalized_name(entry.path.name))
        target, suffix = unique_path(
            naive,
            is_dir=entry.kind in (PathKind.DIRECTORY, PathKind.LINK),
            exists=self.controller.exists,
            taken=taken,
        )
        if suffix is not None:
            log.warning("Target exists, renaming with suffix: '%s' => '%s'", entry.path, target)
        return RenamePlan(entry=entry, target=target, suffix=suffix)

    def normalize(self, roots: Iterable[Path]) -> List[RenamePlan]:
        plans: List[RenamePlan] = []
        taken: Set[Path] = set()
        for root in roots:
            if self.controller.lookup(root) is not PathKind.DIRECTORY:
                continue
            for entry in self.enumerate(root):
                plan = self.plan_entry(entry, taken)
                taken.add(plan.target)
                self.controller.rename(entry.path, plan.target, suffix=plan.suffix)
                plans.append(plan)
        log.info("Renamed %d entr%s containing spaces", len(plans), "y" if len(plans) == 1 else "ies")
        return plans
