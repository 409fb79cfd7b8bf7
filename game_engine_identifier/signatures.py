"""Signature kinds: the closed set of path patterns an engine profile can use.

Every kind holds a single string ``value`` and exposes ``matches(path)``.
The classifier lower-cases each path once and passes the lower-cased form,
so ``matches`` expects its argument to be lower-case already. The pattern
value is lower-cased on comparison; case is never significant.
"""

from dataclasses import dataclass


def _final_component(path: str) -> str:
    """Text after the last '/' (the whole path when there is none)."""
    return path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class SignatureKind:
    """Base class for the signature variants."""

    value: str

    type_name = ""

    @property
    def pattern(self) -> str:
        return self.value.lower()

    def matches(self, path: str) -> bool:
        raise NotImplementedError

    def to_dict(self) -> dict:
        return {"type": self.type_name, "value": self.value}


@dataclass(frozen=True)
class PathContains(SignatureKind):
    """Substring anywhere in the full path."""

    type_name = "path_contains"

    def matches(self, path: str) -> bool:
        return self.pattern in path


@dataclass(frozen=True)
class Extension(SignatureKind):
    """Path ends with '.' + value."""

    type_name = "extension"

    def matches(self, path: str) -> bool:
        return path.endswith("." + self.pattern)


@dataclass(frozen=True)
class Filename(SignatureKind):
    """Whole path equals value, or path ends with '/' + value."""

    type_name = "filename"

    def matches(self, path: str) -> bool:
        pattern = self.pattern
        return path == pattern or path.endswith("/" + pattern)


@dataclass(frozen=True)
class FilenameStartsWith(SignatureKind):
    """Final path component starts with value."""

    type_name = "filename_starts_with"

    def matches(self, path: str) -> bool:
        return _final_component(path).startswith(self.pattern)


@dataclass(frozen=True)
class FilenameEndsWith(SignatureKind):
    """Whole path ends with value.

    Not restricted to the final component: ``"_data/level0"`` as a value
    will match across a separator.
    """

    type_name = "filename_ends_with"

    def matches(self, path: str) -> bool:
        return path.endswith(self.pattern)


@dataclass(frozen=True)
class PathComponent(SignatureKind):
    """Glob-like name such as ``level*``.

    Every '*' is removed and the remainder is used as a prefix test on the
    final path component only. Intermediate directories are not inspected.
    """

    type_name = "path_component"

    @property
    def pattern(self) -> str:
        return self.value.replace("*", "").lower()

    def matches(self, path: str) -> bool:
        return _final_component(path).startswith(self.pattern)


SIGNATURE_KINDS: dict[str, type[SignatureKind]] = {
    kind.type_name: kind
    for kind in (
        PathContains,
        Extension,
        Filename,
        FilenameStartsWith,
        FilenameEndsWith,
        PathComponent,
    )
}


def make_kind(type_name: str, value: str) -> SignatureKind:
    """Build a signature kind from its serialised discriminator and value."""
    try:
        kind_cls = SIGNATURE_KINDS[type_name]
    except KeyError:
        raise ValueError(
            f"Unknown signature type {type_name!r}. "
            f"Must be one of: {sorted(SIGNATURE_KINDS)}"
        ) from None
    kind = kind_cls(value)
    # an empty pattern would match every path
    if not kind.pattern:
        raise ValueError(f"{type_name!r} signature value {value!r} leaves an empty pattern")
    return kind
