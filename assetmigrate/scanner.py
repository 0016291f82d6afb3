import logging
from pathlib import Path
from typing import Iterator, List, Optional

from .classifier import AssetRules, classify
from .default_rules import IGNORED_NAMES
from .errors import ConfigurationError
from .models import AssetCandidate, AssetKind, PathKind
from .utils import walk_tree

log = logging.getLogger(__name__)


class SourceTree:
    """Read-only view of a source root. Files are enumerated once, lazily, sorted by full path."""

    def __init__(self, root: Path):
        if classify(root).kind is not PathKind.DIRECTORY:
            raise ConfigurationError(f"Source path does not exist: {root}")
        self.root = root
        self._files: Optional[List[Path]] = None

    def _walk(self) -> Iterator[Path]:
        for base, dirnames, filenames in walk_tree(self.root):
            dirnames[:] = [d for d in dirnames if d not in IGNORED_NAMES]
            for name in filenames:
                if name not in IGNORED_NAMES:
                    yield base / name

    def files(self) -> List[Path]:
        if self._files is None:
            self._files = sorted(self._walk(), key=str)
        return list(self._files)


class AssetLocator:
    """Finds image directories and audio files inside a SourceTree."""

    def __init__(self, tree: SourceTree, rules: AssetRules | None = None):
        self.tree = tree
        self.rules = rules or AssetRules()

    def _candidates(self, kind: AssetKind) -> List[AssetCandidate]:
        found: List[AssetCandidate] = []
        for p in self.tree.files():
            ext = p.suffix.lower()
            if self.rules.kind_for(ext) is kind:
                found.append(AssetCandidate(path=p, kind=kind, extension=p.suffix))
        return found

    def locate_image_directories(self) -> List[Path]:
        dirs: List[Path] = []
        for name in self.rules.image_dirs:
            conventional = self.tree.root / name
            if classify(conventional).kind is PathKind.DIRECTORY:
                dirs.append(conventional)
        if dirs:
            log.info("Image directories: %s", ", ".join(str(d) for d in dirs))
            return dirs

        log.info("No %s directory in %s, scanning for image files",
                 "/".join(self.rules.image_dirs), self.tree.root)
        parents = sorted({str(c.path.parent) for c in self._candidates(AssetKind.IMAGE)})
        if not parents:
            return []
        log.info("Found images under %d directories, using the first: %s", len(parents), parents[0])
        return [Path(parents[0])]

    def locate_audio_files(self) -> List[AssetCandidate]:
        audio = self._candidates(AssetKind.AUDIO)
        log.info("Found %d audio file(s) in %s", len(audio), self.tree.root)
        return audio
