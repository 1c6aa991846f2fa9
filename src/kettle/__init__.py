from .codec import ABSENT, NO_VALUE, Document, Marker, Section, parse, parse_strict, serialize
from .config import ConfigFile
from .errors import (
    InvalidEntryError,
    InvalidIdentifierError,
    KettleError,
    LoadError,
    ParseError,
    PersistError,
)
from .paths import BaseDirs, PathSet, platform_base_dirs, resolve
from .project import Project, app
from .toolkit import helpers_for


__all__ = [
    "ABSENT",
    "NO_VALUE",
    "Marker",
    "Document",
    "Section",
    "parse",
    "parse_strict",
    "serialize",
    "ConfigFile",
    "Project",
    "app",
    "helpers_for",
    "BaseDirs",
    "PathSet",
    "platform_base_dirs",
    "resolve",
    "KettleError",
    "InvalidIdentifierError",
    "InvalidEntryError",
    "LoadError",
    "PersistError",
    "ParseError",
]
