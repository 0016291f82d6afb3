from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .default_rules import ASSETS_DIR, AUDIO_DIR, IMAGES_DIR


class PathKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    MISSING = "missing"
    LINK = "link"  # symlink to a directory, as listed by a walk; classify() never returns it


class AssetKind(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"


class SelectionReason(str, Enum):
    HEURISTIC_MATCH = "heuristic-match"
    FALLBACK_FIRST = "fallback-first"
    FORCED = "forced"
    NONE_FOUND = "none-found"


class ActionKind(str, Enum):
    MKDIR = "mkdir"
    COPY = "copy"
    RENAME = "rename"
    LINK = "link"


@dataclass(frozen=True)
class PathInfo:
    path: Path
    kind: PathKind
    extension: Optional[str]  # lower-cased, with dot; None for dirs/missing/no suffix


@dataclass(frozen=True)
class AssetCandidate:
    path: Path
    kind: AssetKind
    extension: str


@dataclass(frozen=True)
class SelectionResult:
    chosen: Optional[Path]
    reason: SelectionReason


@dataclass(frozen=True)
class DestinationLayout:
    root: Path
    images_dir: Path
    audio_dir: Path

    @classmethod
    def under(cls, root: Path) -> "DestinationLayout":
        assets = root / ASSETS_DIR
        return cls(root=root, images_dir=assets / IMAGES_DIR, audio_dir=assets / AUDIO_DIR)

    def roots(self) -> List[Path]:
        return [self.images_dir, self.audio_dir]


@dataclass(frozen=True)
class RenameEntry:
    path: Path
    depth: int  # separators between the destination root and the entry
    kind: PathKind


@dataclass(frozen=True)
class RenamePlan:
    entry: RenameEntry
    target: Path
    suffix: Optional[int] = None  # set when the plain target was taken


@dataclass(frozen=True)
class ActionRecord:
    kind: ActionKind
    dst: Path
    src: Optional[Path] = None
    suffix: Optional[int] = None
    overwrote: bool = False
    performed: bool = False  # False if dry-run

    def decision(self) -> tuple:
        """Everything but `performed`: equal between a dry run and a real run."""
        return (self.kind, self.src, self.dst, self.suffix, self.overwrote)


@dataclass
class MigrationReport:
    layout: DestinationLayout
    dry_run: bool
    image_dirs: List[Path] = field(default_factory=list)
    selection: Optional[SelectionResult] = None
    audio_target: Optional[Path] = None
    renames: List[RenamePlan] = field(default_factory=list)
    actions: List[ActionRecord] = field(default_factory=list)
    warnings: List[Warning] = field(default_factory=list)
    file_counts: Dict[Path, int] = field(default_factory=dict)
