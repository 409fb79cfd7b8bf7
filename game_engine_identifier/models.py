"""Data models for game-engine-identifier."""

from dataclasses import dataclass, field

from .signatures import SignatureKind

DEFAULT_WEIGHT = 1.0
UNKNOWN_ENGINE = "Unknown"


@dataclass(frozen=True)
class Signature:
    """One matching rule plus the weight it contributes when it fires."""

    kind: SignatureKind
    weight: float = DEFAULT_WEIGHT


@dataclass(frozen=True)
class EngineConfig:
    """A named classification target and its ordered signatures."""

    name: str
    signatures: tuple[Signature, ...] = ()


@dataclass
class EngineScore:
    """Running tally for a single engine over one file listing."""

    name: str
    score: float = 0.0
    matches: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of classifying one file listing."""

    engine: str
    confidence: float
    matches: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "engine": self.engine,
            "confidence": self.confidence,
            "matches": list(self.matches),
        }
