"""Core classification: signature matching, scoring and winner selection."""

import logging
from pathlib import Path
from typing import Iterable, Self, Sequence

from .config import load_default_engines, load_engines
from .models import UNKNOWN_ENGINE, DetectionResult, EngineConfig, EngineScore

logger = logging.getLogger(__name__)

# (minimum score, confidence), checked top-down
CONFIDENCE_THRESHOLDS: tuple[tuple[float, float], ...] = (
    (5.0, 1.0),
    (2.0, 0.8),
)
LOW_CONFIDENCE = 0.5
NO_CONFIDENCE = 0.0


def confidence_for_score(score: float) -> float:
    """Map a winning score onto the discrete confidence levels."""
    for minimum, confidence in CONFIDENCE_THRESHOLDS:
        if score >= minimum:
            return confidence
    if score > 0.0:
        return LOW_CONFIDENCE
    return NO_CONFIDENCE


def tally_scores(files: Iterable[str], configs: Sequence[EngineConfig]) -> list[EngineScore]:
    """Accumulate per-engine scores and matched paths over a file listing.

    Tallies come back in configuration order. Engines sharing a name share
    one tally. Every matching signature adds its weight and appends the
    original path, so one file can appear several times.
    """
    tallies: dict[str, EngineScore] = {}
    for config in configs:
        tallies.setdefault(config.name, EngineScore(name=config.name))

    for file in files:
        lower_file = file.lower()
        for config in configs:
            tally = tallies[config.name]
            for sig in config.signatures:
                if sig.kind.matches(lower_file):
                    tally.score += sig.weight
                    tally.matches.append(file)

    return list(tallies.values())


def select_winner(tallies: Iterable[EngineScore]) -> EngineScore:
    """Pick the highest-scoring tally.

    "Unknown" starts as the best at 0.0 and is only displaced by a strictly
    higher score, so ties go to the first-declared engine.
    """
    best = EngineScore(name=UNKNOWN_ENGINE)
    for tally in tallies:
        if tally.score > best.score:
            best = tally
    return best


def classify(files: Iterable[str], configs: Sequence[EngineConfig]) -> DetectionResult:
    """Classify a file listing against a set of engine configurations."""
    winner = select_winner(tally_scores(files, configs))
    logger.debug("Winner %s with score %s", winner.name, winner.score)
    return DetectionResult(
        engine=winner.name,
        confidence=confidence_for_score(winner.score),
        matches=list(winner.matches),
    )


class EngineClassifier:
    """Classifies file listings against one loaded, read-only engine profile."""

    def __init__(self, engines: Sequence[EngineConfig] | None = None) -> None:
        if engines is None:
            engines = load_default_engines()
        self._engines: tuple[EngineConfig, ...] = tuple(engines)

    @classmethod
    def from_config(cls, path: str | Path) -> Self:
        """Create a classifier from a YAML or JSON engine profile."""
        return cls(engines=load_engines(path))

    @property
    def engines(self) -> tuple[EngineConfig, ...]:
        return self._engines

    def classify(self, files: Iterable[str]) -> DetectionResult:
        """Classify a single file listing."""
        return classify(files, self._engines)

    def classify_many(self, listings: Iterable[Iterable[str]]) -> list[DetectionResult]:
        """Classify several independent file listings."""
        return [self.classify(files) for files in listings]

    def scores(self, files: Iterable[str]) -> list[EngineScore]:
        """Per-engine tallies for a listing, in profile order."""
        return tally_scores(files, self._engines)
