import os
from pathlib import Path
from typing import Dict, Iterable

import pytest


def build_tree(root: Path, files: Iterable[str]) -> Path:
    """Create each relative path under root; names ending in '/' become directories."""
    for rel in files:
        p = root / rel
        if rel.endswith("/"):
            p.mkdir(parents=True, exist_ok=True)
        else:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(rel, encoding="utf-8")
    return root


def snapshot(root: Path) -> Dict[str, str]:
    """Relative path -> file content, or '<dir>' for directories."""
    if not root.exists():
        return {}
    out: Dict[str, str] = {}
    for p in sorted(root.rglob("*")):
        rel = p.relative_to(root).as_posix()
        out[rel] = "<dir>" if p.is_dir() else p.read_text(encoding="utf-8")
    return out


@pytest.fixture
def make_tree(tmp_path):
    def _make(name: str, files: Iterable[str]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return build_tree(root, files)
    return _make


@pytest.fixture
def figuras(make_tree):
    return make_tree("figuras", [
        "image/cat.png",
        "image/sub dir/dog.png",
        "sound/disparo final.mp3",
    ])


@pytest.fixture
def unreadable(monkeypatch):
    """Directories added to the returned set fail to list, as if chmod 000."""
    locked = set()
    real_scandir = os.scandir

    def guarded(path="."):
        if Path(path) in locked:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", guarded)
    return locked


needs_symlinks = pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt",
                                    reason="symlinks not available")
