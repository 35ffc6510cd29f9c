"""
String normalisation applied by the default decoder before type coercion.

Directives are declared per field with ``form_field(conform="trim,lower")``
and applied left to right.  New directives are added with
:meth:`Conformer.register`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

_WORD_RE = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])|[0-9]+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")
_NAME_STRIP_RE = re.compile(r"[^A-Za-zÀ-ÖØ-öø-ÿ\s'-]")


def _words(value: str) -> list[str]:
    return _WORD_RE.findall(value)


def _ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def _snake(value: str) -> str:
    return "_".join(word.lower() for word in _words(value))


def _camel(value: str) -> str:
    words = [word.lower() for word in _words(value)]
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def _slug(value: str) -> str:
    return _NON_SLUG_RE.sub("-", value.lower()).strip("-")


def _name(value: str) -> str:
    """Person names: strip digits/symbols, collapse separators, title case."""
    cleaned = _NAME_STRIP_RE.sub("", value)
    cleaned = re.sub(r"-+", "-", re.sub(r"\s+", " ", cleaned)).strip(" -")
    return " ".join(
        "-".join(part.capitalize() for part in word.split("-"))
        for word in cleaned.split(" ")
    )


DEFAULT_TRANSFORMS: dict[str, Callable[[str], str]] = {
    "trim": str.strip,
    "ltrim": str.lstrip,
    "rtrim": str.rstrip,
    "lower": str.lower,
    "upper": str.upper,
    "title": str.title,
    "ucfirst": _ucfirst,
    "snake": _snake,
    "camel": _camel,
    "slug": _slug,
    "name": _name,
    "email": lambda value: value.strip().lower(),
    "num": lambda value: "".join(ch for ch in value if ch.isdigit()),
    "!num": lambda value: "".join(ch for ch in value if not ch.isdigit()),
    "alpha": lambda value: "".join(ch for ch in value if ch.isalpha()),
    "!alpha": lambda value: "".join(ch for ch in value if not ch.isalpha()),
}


class Conformer:
    """Registry of named string transforms.

    Usage::

        conformer = Conformer()
        conformer.apply("  Ada@Example.COM ", ("email",))   # "ada@example.com"
    """

    def __init__(self) -> None:
        self._transforms: dict[str, Callable[[str], str]] = dict(DEFAULT_TRANSFORMS)

    def register(self, name: str, transform: Callable[[str], str]) -> None:
        """Add or replace a directive."""
        self._transforms[name] = transform

    def has(self, name: str) -> bool:
        return name in self._transforms

    def apply(self, value: str, directives: Iterable[str]) -> str:
        """Apply *directives* to *value* in order.

        Raises:
            ConfigurationError: If a directive is unknown.
        """
        for directive in directives:
            transform = self._transforms.get(directive)
            if transform is None:
                raise ConfigurationError(f"Unknown conform directive '{directive}'")
            value = transform(value)
        return value
