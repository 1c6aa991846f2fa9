from __future__ import annotations

import logging
import os
from pathlib import Path
from threading import RLock

from .codec import Document, Marker, Value, parse, serialize
from .errors import LoadError, PersistError
from .paths import validate_identifier

__all__ = ["ConfigFile", "DEFAULT_SUFFIX", "config_path"]

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".ini"


def _discard(tmp: Path) -> None:
    try:
        tmp.unlink()
    except OSError:
        pass


def config_path(directory: Path, name: str) -> Path:
    """Return the file backing config *name* inside *directory*.

    ``.ini`` is appended when *name* has no suffix of its own.
    """

    validate_identifier(name, what="config file name")
    path = Path(directory) / name
    if path.suffix == "":
        path = path.with_name(name + DEFAULT_SUFFIX)
    return path


class ConfigFile:
    """A settings file loaded on first use and written on every change.

    A missing file reads as an empty document.  Each mutating call rewrites
    the whole file through a temporary sibling, so a failed write leaves the
    previous contents in place while the in-memory document keeps the change.
    """

    def __init__(self, directory: str | Path, name: str) -> None:
        self.name = name
        self.path = config_path(Path(directory), name)
        self._doc: Document | None = None
        self._lock = RLock()

    def __repr__(self) -> str:
        return f"ConfigFile({self.name!r}, path={str(self.path)!r})"

    # ----- loading -----

    def _load(self) -> Document:
        if self._doc is not None:
            return self._doc
        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Config %s does not exist yet; starting empty", self.path)
            text = ""
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read config %s: %s", self.path, exc)
            raise LoadError(f"cannot read {self.path}: {exc}") from exc
        self._doc = parse(text)
        logger.debug("Loaded config %s", self.path)
        return self._doc

    def reload(self) -> None:
        """Drop the in-memory document and read the file again."""
        with self._lock:
            self._doc = None
            self._load()

    @property
    def document(self) -> Document:
        """A copy of the current document."""
        with self._lock:
            return self._load().copy()

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    # ----- persistence -----

    def _persist(self) -> None:
        text = serialize(self._load())
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8", newline="\n") as fh:
                fh.write(text)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("Failed to write config %s: %s", self.path, exc)
            _discard(tmp)
            raise PersistError(f"cannot write {self.path}: {exc}") from exc
        except BaseException:
            _discard(tmp)
            raise
        logger.debug("Wrote config %s", self.path)

    # ----- default section -----

    def get(self, key: str) -> Value:
        """Return the value of *key*, ``NO_VALUE`` or ``ABSENT``."""
        return self.section_get(None, key)

    def set(self, key: str, value: str | Marker | None) -> None:
        """Store *key*; ``None`` or ``NO_VALUE`` stores it without a value."""
        self.section_set(None, key, value)

    def delete(self, key: str) -> bool:
        return self.section_delete(None, key)

    # ----- named sections -----

    def section_get(self, section: str | None, key: str) -> Value:
        with self._lock:
            return self._load().get(section, key)

    def section_set(self, section: str | None, key: str, value: str | Marker | None) -> None:
        with self._lock:
            self._load().set(section, key, value)
            self._persist()

    def section_delete(self, section: str | None, key: str) -> bool:
        """Remove *key* from *section*; return whether it was there."""
        with self._lock:
            removed = self._load().delete(section, key)
            if removed:
                self._persist()
            return removed
