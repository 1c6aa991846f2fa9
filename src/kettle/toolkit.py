from __future__ import annotations

from typing import Any, Callable

from .codec import ABSENT, Marker
from .project import Project

__all__ = ["helpers_for"]


def helpers_for(
    app_id: str, default_file: str | None = None, **kwargs: Any
) -> tuple[Callable[..., Any], Callable[..., None]]:
    """Return setting helpers bound to *app_id*.

    The returned ``get_setting`` and ``set_setting`` functions operate on the
    default config file of a dedicated :class:`Project`.  ``kwargs`` are
    forwarded to the project (e.g. ``base_dirs``).
    """

    project = Project(app_id, default_file, **kwargs)

    def get_setting(
        key: str,
        *,
        section: str | None = None,
        default: Any = None,
    ) -> Any:
        value = project.config().section_get(section, key)
        if value is ABSENT:
            return default
        return value

    def set_setting(
        key: str,
        value: str | Marker | None,
        *,
        section: str | None = None,
    ) -> None:
        project.config().section_set(section, key, value)

    return get_setting, set_setting
