from __future__ import annotations

import logging
from pathlib import Path

from .codec import Marker, Value
from .config import ConfigFile, config_path
from .paths import BaseDirsProvider, PathSet, platform_base_dirs, resolve, validate_identifier

__all__ = ["DEFAULT_CONFIG_FILE", "Project", "app"]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config"


class Project:
    """Directories and settings files belonging to one application.

    Construct one at startup and pass it to whoever needs it::

        project = Project("my_app")
        project.config_set("default_view", "vertical")
        project.config_get("default_view")        # -> "vertical"
        project.data_dir()                        # e.g. ~/.local/share/my_app

    Directory accessors only compute paths; nothing is created until a
    settings file is written.
    """

    def __init__(
        self,
        app_id: str,
        default_file: str | None = None,
        *,
        base_dirs: BaseDirsProvider = platform_base_dirs,
    ) -> None:
        self.app_id = validate_identifier(app_id)
        self.default_file = validate_identifier(
            default_file if default_file is not None else DEFAULT_CONFIG_FILE,
            what="config file name",
        )
        self._paths: PathSet = resolve(app_id, base_dirs)
        self._files: dict[Path, ConfigFile] = {}
        logger.debug("Resolved directories for %s: %s", app_id, self._paths)

    def __repr__(self) -> str:
        return f"Project({self.app_id!r}, default_file={self.default_file!r})"

    @property
    def paths(self) -> PathSet:
        return self._paths

    # ----- directories -----

    def config_dir(self) -> Path:
        return self._paths.config

    def cache_dir(self) -> Path:
        return self._paths.cache

    def data_dir(self) -> Path:
        return self._paths.data

    def data_local_dir(self) -> Path:
        return self._paths.data_local

    def preference_dir(self) -> Path:
        return self._paths.preference

    # ----- config files -----

    def config_file(self, name: str) -> ConfigFile:
        """Return the handle for config file *name*, creating it on first use.

        Names that resolve to the same file (``config`` and ``config.ini``)
        share one handle for the lifetime of the project.
        """
        path = config_path(self._paths.config, name)
        handle = self._files.get(path)
        if handle is None:
            handle = ConfigFile(self._paths.config, name)
            self._files[path] = handle
        return handle

    def config(self) -> ConfigFile:
        return self.config_file(self.default_file)

    def config_get(self, key: str) -> Value:
        return self.config().get(key)

    def config_set(self, key: str, value: str | Marker | None) -> None:
        self.config().set(key, value)

    def config_delete(self, key: str) -> bool:
        return self.config().delete(key)

    def config_section_get(self, section: str, key: str) -> Value:
        return self.config().section_get(section, key)

    def config_section_set(self, section: str, key: str, value: str | Marker | None) -> None:
        self.config().section_set(section, key, value)

    def config_section_delete(self, section: str, key: str) -> bool:
        return self.config().section_delete(section, key)


def app(
    app_id: str,
    default_file: str | None = None,
    *,
    base_dirs: BaseDirsProvider = platform_base_dirs,
) -> Project:
    """Return a :class:`Project` for *app_id*."""
    return Project(app_id, default_file, base_dirs=base_dirs)
