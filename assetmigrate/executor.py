import logging
import os
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from .classifier import classify
from .errors import FilesystemError
from .models import ActionKind, ActionRecord, PathKind
from .utils import walk_tree

log = logging.getLogger(__name__)


class ExecutionController:
    """Gate for every mutating filesystem call.

    In dry-run mode nothing is touched: each action is recorded and applied
    to an in-memory overlay instead, so later decisions (does this target
    exist? what is under this directory?) see the same state a real run
    would have produced at that point.
    """

    def __init__(self, dry_run: bool = True):
        self.dry_run = dry_run
        self.actions: List[ActionRecord] = []
        self._created: Dict[Path, PathKind] = {}
        self._removed: Set[Path] = set()

    # -- queries ---------------------------------------------------------

    def _hidden(self, path: Path) -> bool:
        return any(p in self._removed for p in (path, *path.parents))

    def lookup(self, path: Path) -> PathKind:
        """Kind of `path`, following symlinks."""
        if path in self._created:
            kind = self._created[path]
            return PathKind.DIRECTORY if kind is PathKind.LINK else kind
        if self._hidden(path):
            return PathKind.MISSING
        return classify(path).kind

    def entry_kind(self, path: Path) -> PathKind:
        """Kind of the entry itself: a symlink to a directory is LINK, any other symlink FILE."""
        if path in self._created:
            return self._created[path]
        if self._hidden(path):
            return PathKind.MISSING
        if path.is_symlink():
            return PathKind.LINK if path.is_dir() else PathKind.FILE
        return classify(path).kind

    def exists(self, path: Path) -> bool:
        return self.entry_kind(path) is not PathKind.MISSING

    def walk(self, root: Path) -> List[Tuple[Path, PathKind]]:
        """Every entry below `root` (not root itself), real and hypothetical, sorted by path.

        Symlinked directories are listed as LINK and not descended into.
        """
        entries: Dict[Path, PathKind] = {}
        if classify(root).kind is PathKind.DIRECTORY:
            for base, dirnames, filenames in walk_tree(root):
                for d in dirnames:
                    p = base / d
                    entries[p] = PathKind.LINK if p.is_symlink() else PathKind.DIRECTORY
                for f in filenames:
                    entries[base / f] = PathKind.FILE
        entries = {p: k for p, k in entries.items() if not self._hidden(p)}
        for p, kind in self._created.items():
            if root in p.parents:
                entries[p] = kind
        return sorted(entries.items(), key=lambda item: str(item[0]))

    def _same_file(self, src: Path, dst: Path) -> bool:
        if dst in self._created or self._hidden(dst):
            return False
        try:
            return os.path.samefile(src, dst)
        except OSError:
            return False

    # -- actions ---------------------------------------------------------

    def log(self, record: ActionRecord) -> ActionRecord:
        self.actions.append(record)
        prefix = "[DRY] " if self.dry_run else ""
        if record.src is None:
            log.info("%s%s %s", prefix, record.kind.value, record.dst)
        else:
            log.info("%s%s %s -> %s", prefix, record.kind.value, record.src, record.dst)
        return record

    def _mark_created(self, path: Path, kind: PathKind) -> None:
        # A path recreated after a rename stays in _removed so the old real
        # children below it remain hidden.
        self._created[path] = kind

    def make_dirs(self, path: Path) -> Optional[ActionRecord]:
        """mkdir -p. Returns None when the directory is already there."""
        if self.lookup(path) is PathKind.DIRECTORY:
            return None
        if self.dry_run:
            for p in (path, *path.parents):
                kind = self.lookup(p)
                if kind is PathKind.DIRECTORY:
                    break
                if kind is PathKind.FILE:
                    raise FilesystemError(f"Cannot create directory {path}: {p} is a file")
                self._mark_created(p, PathKind.DIRECTORY)
        else:
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FilesystemError(f"Cannot create directory {path}: {exc}") from exc
        return self.log(ActionRecord(ActionKind.MKDIR, path, performed=not self.dry_run))

    def copy_file(self, src: Path, dst: Path) -> Optional[ActionRecord]:
        """Copy with metadata. Returns None when src already is dst."""
        if self.lookup(dst) is PathKind.DIRECTORY:
            raise FilesystemError(f"Cannot copy {src} -> {dst}: target is a directory")
        if self._same_file(src, dst):
            log.info("%s already in place", dst)
            return None
        overwrote = self.exists(dst)
        if self.dry_run:
            if not os.access(src, os.R_OK):
                raise FilesystemError(f"Cannot copy {src} -> {dst}: source is not readable")
            self._mark_created(dst, PathKind.FILE)
        else:
            try:
                shutil.copy2(str(src), str(dst))
            except OSError as exc:
                raise FilesystemError(f"Cannot copy {src} -> {dst}: {exc}") from exc
        return self.log(ActionRecord(ActionKind.COPY, dst, src=src, overwrote=overwrote,
                                     performed=not self.dry_run))

    def copy_link(self, src: Path, dst: Path) -> ActionRecord:
        """Recreate the directory symlink `src` at `dst`, pointing where src points."""
        try:
            target = os.readlink(src)
        except OSError as exc:
            raise FilesystemError(f"Cannot read link {src}: {exc}") from exc
        existing = self.entry_kind(dst)
        if existing is PathKind.DIRECTORY:
            raise FilesystemError(f"Cannot link {src} -> {dst}: target is a directory")
        overwrote = existing is not PathKind.MISSING
        if self.dry_run:
            # Same view a real walk would get: dangling links list as files.
            pointee = Path(os.path.normpath(dst.parent / target))
            resolves = self.lookup(pointee) is PathKind.DIRECTORY
            self._mark_created(dst, PathKind.LINK if resolves else PathKind.FILE)
        else:
            try:
                if overwrote:
                    dst.unlink()
                os.symlink(target, dst, target_is_directory=True)
            except OSError as exc:
                raise FilesystemError(f"Cannot link {src} -> {dst}: {exc}") from exc
        return self.log(ActionRecord(ActionKind.LINK, dst, src=src, overwrote=overwrote,
                                     performed=not self.dry_run))

    def rename(self, src: Path, dst: Path, suffix: Optional[int] = None) -> ActionRecord:
        if self.dry_run:
            kind = self.entry_kind(src)
            if kind is PathKind.MISSING:
                raise FilesystemError(f"Cannot rename {src} -> {dst}: no such file or directory")
            moved = [(src, kind)]
            if kind is PathKind.DIRECTORY:
                moved += self.walk(src)
            for p, kind in moved:
                self._created.pop(p, None)
                self._mark_created(dst / p.relative_to(src), kind)
            self._removed.add(src)
        else:
            try:
                src.rename(dst)
            except OSError as exc:
                raise FilesystemError(f"Cannot rename {src} -> {dst}: {exc}") from exc
        return self.log(ActionRecord(ActionKind.RENAME, dst, src=src, suffix=suffix,
                                     performed=not self.dry_run))
