"""Engine profile loading and validation.

Profiles are YAML (JSON documents load too, since JSON is a YAML subset).
A profile is either a list of engine records or a mapping with an
``engines`` list. Loading fails fast: a malformed record raises instead of
being skipped, so a broken profile never degrades into classifying
everything as "Unknown".
"""

import importlib.resources
import logging
import math
from pathlib import Path
from typing import Any

import yaml

from .models import DEFAULT_WEIGHT, UNKNOWN_ENGINE, EngineConfig, Signature
from .signatures import make_kind

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default.yaml"


def load_engines(path: str | Path) -> tuple[EngineConfig, ...]:
    """Load an engine profile from a YAML or JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        text = f.read()
    engines = parse_engines(text)
    logger.info(
        "Loaded %d engines (%d signatures) from %s",
        len(engines), _signature_count(engines), path,
    )
    return engines


def load_default_engines() -> tuple[EngineConfig, ...]:
    """Load the bundled default engine profile."""
    res = importlib.resources.files("game_engine_identifier") / "engine_profiles" / DEFAULT_PROFILE
    engines = parse_engines(res.read_text(encoding="utf-8"))
    logger.debug("Loaded %d bundled engines", len(engines))
    return engines


def parse_engines(text: str) -> tuple[EngineConfig, ...]:
    """Parse and validate an engine profile from its serialised text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid engine profile: {e}") from e
    return _build_engines(data)


def _build_engines(data: Any) -> tuple[EngineConfig, ...]:
    """Build engine configs from parsed profile data."""
    if isinstance(data, dict):
        if "engines" not in data:
            raise ValueError("Engine profile mapping requires an 'engines' list")
        data = data["engines"]
    if not isinstance(data, list):
        raise ValueError(
            f"Engine profile must be a list of engines, got {type(data).__name__}"
        )

    engines = tuple(_parse_engine(e) for e in data)
    _validate_engines(engines)
    return engines


def _parse_engine(data: Any) -> EngineConfig:
    """Parse a single engine record."""
    if not isinstance(data, dict):
        raise ValueError(f"Engine record must be a mapping: {data!r}")

    required = {"name", "signatures"}
    missing = required - set(data.keys())
    if missing:
        raise ValueError(f"Engine missing required fields: {sorted(missing)}")

    name = data["name"]
    if not isinstance(name, str) or not name:
        raise ValueError(f"Engine name must be a non-empty string: {name!r}")

    sigs = data["signatures"]
    if not isinstance(sigs, list):
        raise ValueError(f"Engine {name!r}: 'signatures' must be a list")

    return EngineConfig(
        name=name,
        signatures=tuple(_parse_signature(s, name) for s in sigs),
    )


def _parse_signature(data: Any, engine_name: str) -> Signature:
    """Parse a single signature record: type, value and optional weight."""
    if not isinstance(data, dict):
        raise ValueError(f"Engine {engine_name!r}: signature must be a mapping: {data!r}")

    type_name = data.get("type")
    if not type_name:
        raise ValueError(f"Engine {engine_name!r}: signature missing 'type': {data}")
    if not isinstance(type_name, str):
        raise ValueError(f"Engine {engine_name!r}: signature 'type' must be a string, got {type_name!r}")

    value = data.get("value")
    if not isinstance(value, str) or not value:
        raise ValueError(
            f"Engine {engine_name!r}: {type_name!r} signature requires a non-empty string 'value'"
        )

    try:
        kind = make_kind(type_name, value)
    except ValueError as e:
        raise ValueError(f"Engine {engine_name!r}: {e}") from None

    return Signature(kind=kind, weight=_parse_weight(data.get("weight"), engine_name))


def _parse_weight(raw: Any, engine_name: str) -> float:
    """Parse a signature weight, defaulting to 1.0 when absent."""
    if raw is None:
        return DEFAULT_WEIGHT
    # bool is an int subclass; "weight: yes" is not a weight
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"Engine {engine_name!r}: weight must be a number, got {raw!r}")
    try:
        weight = float(raw)
    except OverflowError:
        raise ValueError(f"Engine {engine_name!r}: weight is too large, got {raw!r}") from None
    if not math.isfinite(weight) or weight <= 0:
        raise ValueError(f"Engine {engine_name!r}: weight must be positive, got {raw!r}")
    return weight


def _validate_engines(engines: tuple[EngineConfig, ...]) -> None:
    """Reject duplicate and reserved engine names."""
    seen_names = set()
    for e in engines:
        if e.name == UNKNOWN_ENGINE:
            raise ValueError(f"Engine name {UNKNOWN_ENGINE!r} is reserved")
        if e.name in seen_names:
            raise ValueError(f"Duplicate engine name: {e.name!r}")
        seen_names.add(e.name)


def _signature_count(engines: tuple[EngineConfig, ...]) -> int:
    return sum(len(e.signatures) for e in engines)
