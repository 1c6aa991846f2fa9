from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from platformdirs import (
    user_cache_dir as _ucache,
    user_config_dir as _uc,
    user_data_dir as _ud,
)

from .errors import InvalidIdentifierError

__all__ = [
    "BaseDirs",
    "PathSet",
    "HOME_ENV",
    "platform_base_dirs",
    "resolve",
    "validate_identifier",
]

HOME_ENV = "KETTLE_HOME"

_SEPARATORS = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())

# ---------------------------------------------------------------------------
# Identifier validation
# ---------------------------------------------------------------------------

def validate_identifier(name: str, *, what: str = "application identifier") -> str:
    """Return *name* unchanged if it can be used as a single path segment.

    Empty names, names made of whitespace, ``.``/``..`` and names containing
    a path separator or a NUL byte are rejected with
    :class:`~kettle.errors.InvalidIdentifierError`.
    """

    if not isinstance(name, str):
        raise InvalidIdentifierError(f"{what} must be a string, got {type(name).__name__}")
    if not name.strip() or name in {".", ".."}:
        raise InvalidIdentifierError(f"invalid {what}: {name!r}")
    if "\0" in name or any(sep in name for sep in _SEPARATORS):
        raise InvalidIdentifierError(f"invalid {what}: {name!r}")
    return name


# ---------------------------------------------------------------------------
# Platform roots
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseDirs:
    """Platform roots before the application segment is appended."""

    config_root: Path
    cache_root: Path
    data_root: Path
    data_local_root: Path
    preference_root: Path


@dataclass(frozen=True)
class PathSet:
    """Absolute per-application directories."""

    config: Path
    cache: Path
    data: Path
    data_local: Path
    preference: Path


BaseDirsProvider = Callable[[str], BaseDirs]


def _home_override() -> Path | None:
    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return None


def platform_base_dirs(app_name: str) -> BaseDirs:
    """Return the platform roots that *app_name*'s directories live under.

    ``app_name`` is accepted so that callers can swap in a collaborator that
    places applications differently; the default roots do not depend on it.
    Setting ``KETTLE_HOME`` moves every root below that directory.
    """

    home = _home_override()
    if home is not None:
        return BaseDirs(
            config_root=home / "config",
            cache_root=home / "cache",
            data_root=home / "data",
            data_local_root=home / "data-local",
            preference_root=home / "preferences",
        )
    config_root = Path(_uc(appname=None, roaming=True)).resolve()
    if sys.platform == "darwin":
        preference_root = (Path.home() / "Library" / "Preferences").resolve()
    else:
        preference_root = config_root
    return BaseDirs(
        config_root=config_root,
        cache_root=Path(_ucache(appname=None)).resolve(),
        data_root=Path(_ud(appname=None, roaming=True)).resolve(),
        data_local_root=Path(_ud(appname=None, roaming=False)).resolve(),
        preference_root=preference_root,
    )


def resolve(app_id: str, base_dirs: BaseDirsProvider = platform_base_dirs) -> PathSet:
    """Return the directories for *app_id*.

    ``base_dirs`` is called exactly once; ``app_id`` is appended as the last
    segment of every root.  Nothing is created on disk.
    """

    validate_identifier(app_id)
    roots = base_dirs(app_id)
    return PathSet(
        config=Path(roots.config_root).absolute() / app_id,
        cache=Path(roots.cache_root).absolute() / app_id,
        data=Path(roots.data_root).absolute() / app_id,
        data_local=Path(roots.data_local_root).absolute() / app_id,
        preference=Path(roots.preference_root).absolute() / app_id,
    )
