import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from .classifier import AssetRules, classify
from .errors import ConfigurationError
from .models import AssetCandidate, PathKind, SelectionReason, SelectionResult

log = logging.getLogger(__name__)

Candidate = Union[AssetCandidate, Path]


class AudioSelector:
    """Picks at most one audio file.

    First hinted name in discovery order wins; otherwise the first candidate.
    Ties are broken by position only, never by content.
    """

    def __init__(self, rules: AssetRules | None = None):
        self.rules = rules or AssetRules()

    def select(self, candidates: Sequence[Candidate], forced_path: Optional[Path] = None) -> SelectionResult:
        if forced_path is not None:
            if classify(forced_path).kind is not PathKind.FILE:
                raise ConfigurationError(f"Forced audio file not found: {forced_path}")
            log.info("Using forced audio: %s", forced_path)
            return SelectionResult(forced_path, SelectionReason.FORCED)

        paths = [c.path if isinstance(c, AssetCandidate) else Path(c) for c in candidates]
        if not paths:
            return SelectionResult(None, SelectionReason.NONE_FOUND)

        for p in paths:
            if self.rules.is_hinted(p):
                log.info("Audio selected: %s", p)
                return SelectionResult(p, SelectionReason.HEURISTIC_MATCH)

        log.info("No hinted audio name, using the first found: %s", paths[0])
        return SelectionResult(paths[0], SelectionReason.FALLBACK_FIRST)
