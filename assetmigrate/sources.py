import logging
import re
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from .default_rules import DEFAULT_SOURCE_REPO
from .errors import ConfigurationError
from .utils import resolve_directory

log = logging.getLogger(__name__)

_REMOTE = re.compile(r"^(https?://|git@)")


def is_remote_reference(source: str) -> bool:
    return bool(_REMOTE.match(source))


def clone(url: str, target: Path) -> None:
    cmd_args = ["git", "clone", "--depth", "1", url, str(target)]
    try:
        subprocess.run(cmd_args, check=True, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise ConfigurationError("git is not installed; cannot clone " + url) from exc
    except subprocess.CalledProcessError as exc:
        raise ConfigurationError(f"git clone failed for {url}: {exc.stderr.strip()}") from exc


class SourceCheckout:
    """Context manager yielding a readable source directory.

    Local paths are used as they are. Remote git references (and the default
    repository, when no source is given) are cloned into a temporary directory
    that is removed on exit unless `keep_clone` is set.
    """

    def __init__(self, source: Optional[str] = None, keep_clone: bool = False):
        self.source = source or DEFAULT_SOURCE_REPO
        self.keep_clone = keep_clone
        self.clone_dir: Optional[Path] = None

    def __enter__(self) -> Path:
        if not is_remote_reference(self.source):
            return resolve_directory(self.source)

        self.clone_dir = Path(tempfile.mkdtemp(prefix="assetmigrate-"))
        log.info("Cloning %s into %s", self.source, self.clone_dir)
        try:
            clone(self.source, self.clone_dir)
        except ConfigurationError:
            self._cleanup()
            raise
        return self.clone_dir

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.keep_clone:
            if self.clone_dir is not None:
                log.info("Keeping clone at %s", self.clone_dir)
            return
        self._cleanup()

    def _cleanup(self) -> None:
        if self.clone_dir is not None:
            log.info("Removing temporary clone %s", self.clone_dir)
            shutil.rmtree(self.clone_dir, ignore_errors=True)
            self.clone_dir = None
