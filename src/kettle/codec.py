"""Parsing and serialization of kettle's INI-style settings format.

The format is deliberately small::

    key1=value1
    key_no_value
    key with spaces=also has spaces

    [section_name]
    key2=value2
    key3=

Keys before the first ``[section]`` header belong to the default section.  A
bare ``key`` and ``key=`` are different things: the first is a key without a
value (:data:`NO_VALUE`), the second a key whose value is the empty string.

:func:`parse` is forgiving and never raises; malformed lines are skipped.
:func:`parse_strict` applies the same grammar but reports the first malformed
line as a :class:`~kettle.errors.ParseError`.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from typing import Union

from .errors import InvalidEntryError, ParseError

__all__ = [
    "ABSENT",
    "NO_VALUE",
    "Marker",
    "Value",
    "Section",
    "Document",
    "parse",
    "parse_strict",
    "serialize",
]

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = (";", "#")
_LINE_BREAKS = ("\n", "\r", "\v", "\f", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029")


class Marker(enum.Enum):
    """Value-states that are not a string.

    Both members are falsy so ``if cfg.get(key):`` never mistakes a missing
    key for a real value; compare with ``is`` to tell them apart.
    """

    ABSENT = "absent"
    NO_VALUE = "no-value"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"kettle.{self.name}"


ABSENT = Marker.ABSENT
NO_VALUE = Marker.NO_VALUE

# What a lookup returns: a string, ``NO_VALUE`` or ``ABSENT``.
Value = Union[str, Marker]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _has_line_break(text: str) -> bool:
    return any(ch in text for ch in _LINE_BREAKS)


def _encodable(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def check_key(key: str) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidEntryError(f"invalid key: {key!r}")
    if key != key.strip():
        raise InvalidEntryError(f"key has surrounding whitespace: {key!r}")
    if any(ch in key for ch in "=[]") or _has_line_break(key):
        raise InvalidEntryError(f"key may not contain '=', '[', ']' or line breaks: {key!r}")
    if key.startswith(COMMENT_PREFIXES):
        raise InvalidEntryError(f"key may not start with a comment character: {key!r}")
    if not _encodable(key):
        raise InvalidEntryError(f"key is not valid UTF-8 text: {key!r}")
    return key


def check_section_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidEntryError(f"invalid section name: {name!r}")
    if name != name.strip():
        raise InvalidEntryError(f"section name has surrounding whitespace: {name!r}")
    if "[" in name or "]" in name or _has_line_break(name):
        raise InvalidEntryError(f"section name may not contain '[', ']' or line breaks: {name!r}")
    if not _encodable(name):
        raise InvalidEntryError(f"section name is not valid UTF-8 text: {name!r}")
    return name


def normalize_value(value: str | Marker | None) -> str | Marker:
    """Return the stored form of *value*; ``None`` means "no value"."""

    if value is None or value is NO_VALUE:
        return NO_VALUE
    if value is ABSENT:
        raise InvalidEntryError("ABSENT cannot be stored; delete the key instead")
    if not isinstance(value, str):
        raise InvalidEntryError(f"value must be a string, got {type(value).__name__}")
    if value != value.strip():
        raise InvalidEntryError(f"value has surrounding whitespace: {value!r}")
    if _has_line_break(value):
        raise InvalidEntryError(f"value may not contain line breaks: {value!r}")
    if not _encodable(value):
        raise InvalidEntryError(f"value is not valid UTF-8 text: {value!r}")
    return value


# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------

class Section:
    """Ordered key -> value mapping.

    ``name`` is ``None`` for the default section.  Overwriting a key keeps its
    original position.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._entries: dict[str, str | Marker] = {}

    def get(self, key: str) -> Value:
        return self._entries.get(key, ABSENT)

    def set(self, key: str, value: str | Marker | None) -> None:
        self._entries[check_key(key)] = normalize_value(value)

    def _put(self, key: str, value: str | Marker) -> None:
        # unchecked; callers pass entries that already satisfy the grammar
        self._entries[key] = value

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, ABSENT) is not ABSENT

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, str | Marker]]:
        return list(self._entries.items())

    def copy(self) -> Section:
        dup = Section(self.name)
        dup._entries = dict(self._entries)
        return dup

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self.name == other.name and self.items() == other.items()

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {self._entries!r})"


class Document:
    """Parsed settings file: a default section plus named sections in order.

    Methods taking a ``section`` argument address the default section when it
    is ``None``.
    """

    def __init__(self) -> None:
        self.default = Section()
        self._sections: dict[str, Section] = {}

    def section(self, name: str | None) -> Section | None:
        if name is None:
            return self.default
        return self._sections.get(name)

    def ensure_section(self, name: str | None) -> Section:
        if name is None:
            return self.default
        sec = self._sections.get(name)
        if sec is None:
            sec = Section(check_section_name(name))
            self._sections[name] = sec
        return sec

    def remove_section(self, name: str) -> bool:
        return self._sections.pop(name, None) is not None

    def sections(self) -> list[Section]:
        """Return the named sections in document order."""
        return list(self._sections.values())

    def get(self, section: str | None, key: str) -> Value:
        sec = self.section(section)
        if sec is None:
            return ABSENT
        return sec.get(key)

    def set(self, section: str | None, key: str, value: str | Marker | None) -> None:
        # validate before creating the section so a bad key leaves no trace
        check_key(key)
        stored = normalize_value(value)
        self.ensure_section(section).set(key, stored)

    def delete(self, section: str | None, key: str) -> bool:
        sec = self.section(section)
        if sec is None:
            return False
        return sec.delete(key)

    def is_empty(self) -> bool:
        return not self.default and not self._sections

    def copy(self) -> Document:
        dup = Document()
        dup.default = self.default.copy()
        dup._sections = {name: sec.copy() for name, sec in self._sections.items()}
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.default == other.default and self.sections() == other.sections()

    def __repr__(self) -> str:
        return f"Document(default={self.default!r}, sections={self.sections()!r})"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_SKIP = "skip"
_HEADER = "header"
_ENTRY = "entry"
_MALFORMED = "malformed"


def _classify(raw: str) -> tuple[str, tuple]:
    line = raw.strip()
    if not line or line.startswith(COMMENT_PREFIXES):
        return _SKIP, ()
    if line.startswith("[") and line.endswith("]"):
        name = line[1:-1].strip()
        if not name or "[" in name or "]" in name:
            return _MALFORMED, ("bad section header",)
        return _HEADER, (name,)
    key, sep, value = line.partition("=")
    key = key.strip()
    if not key:
        return _MALFORMED, ("missing key",)
    if "[" in key or "]" in key:
        return _MALFORMED, ("brackets in key",)
    if not sep:
        return _ENTRY, (key, NO_VALUE)
    return _ENTRY, (key, value.strip())


def _parse(text: str, *, strict: bool) -> Document:
    doc = Document()
    current = doc.default
    for lineno, raw in enumerate(text.splitlines(), start=1):
        kind, payload = _classify(raw)
        if kind == _SKIP:
            continue
        if kind == _MALFORMED:
            if strict:
                raise ParseError(lineno, raw, payload[0])
            logger.debug("Skipping malformed line %d (%s): %r", lineno, payload[0], raw)
            continue
        if kind == _HEADER:
            current = doc.ensure_section(payload[0])
        else:
            key, value = payload
            current._put(key, value)
    return doc


def parse(text: str) -> Document:
    """Parse *text* into a :class:`Document`, skipping malformed lines.

    Repeated ``[section]`` headers re-open the existing section; a repeated
    key keeps its first position and takes the last value.
    """
    return _parse(text, strict=False)


def parse_strict(text: str) -> Document:
    """Like :func:`parse` but raise :class:`ParseError` on malformed lines."""
    return _parse(text, strict=True)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _format_entry(key: str, value: str | Marker) -> str:
    if value is NO_VALUE:
        return key
    return f"{key}={value}"


def serialize(doc: Document) -> str:
    """Return the text form of *doc*; ``parse(serialize(doc)) == doc``."""

    lines = [_format_entry(k, v) for k, v in doc.default.items()]
    for section in doc.sections():
        if lines:
            lines.append("")
        lines.append(f"[{section.name}]")
        lines.extend(_format_entry(k, v) for k, v in section.items())
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
