from pathlib import Path
import json
from typing import Iterable, Optional, Set, Tuple

from .default_rules import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_AUDIO_HINTS,
    DEFAULT_AUDIO_NAME,
    DEFAULT_IMAGE_DIRS,
    DEFAULT_IMAGE_EXTENSIONS,
)
from .errors import ConfigurationError
from .models import AssetKind, PathInfo, PathKind


def classify(path: Path) -> PathInfo:
    """File, directory or missing, plus the lower-cased extension of files.

    Never raises: anything that cannot be stat'ed counts as missing.
    """
    try:
        if path.is_dir():
            return PathInfo(path, PathKind.DIRECTORY, None)
        if path.is_file():
            return PathInfo(path, PathKind.FILE, path.suffix.lower() or None)
    except OSError:
        pass
    return PathInfo(path, PathKind.MISSING, None)


def _dotted(ext: str) -> str:
    ext = ext.strip().lower()
    if not ext.startswith("."):
        # Be kind: auto-fix missing dot
        ext = "." + ext
    return ext


class AssetRules:
    """Extensions, directory names and hint tokens, loaded from defaults + optional JSON file."""
    def __init__(self, user_rules_path: Path | None = None):
        self.image_extensions: Set[str] = set(DEFAULT_IMAGE_EXTENSIONS)
        self.audio_extensions: Set[str] = set(DEFAULT_AUDIO_EXTENSIONS)
        self.image_dirs: Tuple[str, ...] = tuple(DEFAULT_IMAGE_DIRS)
        self.audio_hints: Tuple[str, ...] = tuple(DEFAULT_AUDIO_HINTS)
        self.audio_name: str = DEFAULT_AUDIO_NAME
        if user_rules_path:
            self._load_user_rules(user_rules_path)

    def _load_user_rules(self, path: Path):
        if not path.is_file():
            raise ConfigurationError(f"Rules file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Rules file unreadable: {path} ({exc})") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Rules file must hold a JSON object: {path}")

        if "image_extensions" in data:
            self.image_extensions = {_dotted(e) for e in self._strings(data, "image_extensions")}
        if "audio_extensions" in data:
            self.audio_extensions = {_dotted(e) for e in self._strings(data, "audio_extensions")}
        if "image_dirs" in data:
            self.image_dirs = tuple(self._strings(data, "image_dirs"))
        if "audio_hints" in data:
            self.audio_hints = tuple(h.lower() for h in self._strings(data, "audio_hints"))
        if "audio_name" in data:
            name = data["audio_name"]
            if not isinstance(name, str) or not name or "/" in name:
                raise ConfigurationError(f"Invalid audio_name in {path}: {name!r}")
            self.audio_name = name

    @staticmethod
    def _strings(data: dict, key: str) -> Iterable[str]:
        value = data[key]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Rules key '{key}' must be a list of strings")
        return value

    def kind_for(self, extension: Optional[str]) -> Optional[AssetKind]:
        if not extension:
            return None
        ext = extension.lower()
        if ext in self.image_extensions:
            return AssetKind.IMAGE
        if ext in self.audio_extensions:
            return AssetKind.AUDIO
        return None

    def is_hinted(self, path: Path) -> bool:
        name = path.name.lower()
        return any(token in name for token in self.audio_hints)
