"""game-engine-identifier: Identify a game's engine from its file listing."""

from .classifier import EngineClassifier, classify, confidence_for_score, tally_scores
from .config import load_default_engines, load_engines
from .models import UNKNOWN_ENGINE, DetectionResult, EngineConfig, EngineScore, Signature

__all__ = [
    "EngineClassifier",
    "classify",
    "confidence_for_score",
    "tally_scores",
    "load_engines",
    "load_default_engines",
    "DetectionResult",
    "EngineConfig",
    "EngineScore",
    "Signature",
    "UNKNOWN_ENGINE",
]
