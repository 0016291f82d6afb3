from pathlib import Path
import os
import shutil
from typing import Callable, Collection, Iterable, Iterator, List, Optional, Tuple

from .default_rules import IGNORED_NAMES
from .errors import ConfigurationError, FilesystemError

def resolve_directory(path_str: str) -> Path:
    """Return a resolved Path object and ensure it is an existing directory."""
    p = Path(path_str).expanduser().resolve()
    if not p.is_dir():
        raise ConfigurationError(f"Source path does not exist: {p}")
    return p


def normalized_name(name: str) -> str:
    return name.replace(" ", "_")


def split_extension(name: str, is_dir: bool) -> Tuple[str, str]:
    """Split 'a b.png' into ('a b', '.png'). Directories never have an extension."""
    if is_dir:
        return name, ""
    suffix = Path(name).suffix
    if not suffix:
        return name, ""
    return name[: -len(suffix)], suffix


def unique_path(
    dest: Path,
    is_dir: bool,
    exists: Callable[[Path], bool],
    taken: Collection[Path] = (),
) -> Tuple[Path, Optional[int]]:
    """
    If dest is in use, append '_1', '_2', ... before the suffix (files) or at the end (dirs).
    `exists` decides what is on disk, `taken` holds targets already handed out.
    Returns the free path and the number used, or None if dest was free.
    """
    if not exists(dest) and dest not in taken:
        return dest, None

    stem, suffix = split_extension(dest.name, is_dir)
    parent = dest.parent
    i = 1
    while True:
        candidate = parent / f"{stem}_{i}{suffix}"
        if not exists(candidate) and candidate not in taken:
            return candidate, i
        i += 1


def validate_layout(image_dirs: Iterable[Path], images_dest: Path) -> None:
    # Prevent copying a folder into a subfolder of itself
    dest = images_dest.resolve()
    for src in image_dirs:
        src = src.resolve()
        if dest == src or src in dest.parents:
            raise ConfigurationError(f"Destination {images_dest} cannot be inside image source {src}.")


def _unreadable(exc: OSError) -> None:
    raise FilesystemError(f"Cannot read {exc.filename}: {exc.strerror or exc}") from exc


def walk_tree(root: Path) -> Iterator[Tuple[Path, List[str], List[str]]]:
    """os.walk that fails on unreadable directories instead of skipping them.

    Symlinked directories are listed in dirnames but not descended into.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_unreadable):
        yield Path(dirpath), dirnames, filenames


def tree_size(paths: Iterable[Path]) -> int:
    total = 0
    try:
        for p in paths:
            if p.is_file():
                total += p.stat().st_size
            elif p.is_dir():
                for base, dirnames, filenames in walk_tree(p):
                    dirnames[:] = [d for d in dirnames if d not in IGNORED_NAMES]
                    for name in filenames:
                        if name not in IGNORED_NAMES:
                            total += (base / name).stat().st_size
    except OSError as exc:
        raise FilesystemError(f"Cannot measure {exc.filename}: {exc.strerror or exc}") from exc
    return total


def check_free_space(dest: Path, required_bytes: int) -> None:
    anchor = dest
    while not anchor.exists() and anchor != anchor.parent:
        anchor = anchor.parent
    total, used, free = shutil.disk_usage(anchor)
    if free < required_bytes:
        raise FilesystemError(
            f"Not enough disk space under {anchor}: {required_bytes} bytes needed, {free} free."
        )
