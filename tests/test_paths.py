from __future__ import annotations

from pathlib import Path

import pytest

from kettle.errors import InvalidIdentifierError
from kettle.paths import platform_base_dirs, resolve, validate_identifier


def test_platform_roots_absolute(monkeypatch) -> None:
    monkeypatch.delenv("KETTLE_HOME", raising=False)
    roots = platform_base_dirs("demo")
    for root in (
        roots.config_root,
        roots.cache_root,
        roots.data_root,
        roots.data_local_root,
        roots.preference_root,
    ):
        assert root.is_absolute()


def test_platform_roots_do_not_include_app_name(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("KETTLE_HOME", raising=False)
    seen: list[object] = []

    def fake_config_dir(*, appname=None, roaming=False):
        seen.append(appname)
        return str(tmp_path / "cfg")

    monkeypatch.setattr("kettle.paths._uc", fake_config_dir)
    roots = platform_base_dirs("demo")
    assert roots.config_root == (tmp_path / "cfg").resolve()
    assert seen == [None]


def test_home_override(kettle_home: Path) -> None:
    roots = platform_base_dirs("demo")
    assert roots.config_root == kettle_home.resolve() / "config"
    assert roots.cache_root == kettle_home.resolve() / "cache"
    assert roots.data_root == kettle_home.resolve() / "data"


def test_resolve_appends_app_id(fake_base_dirs, tmp_path: Path) -> None:
    paths = resolve("app_name", fake_base_dirs)
    assert paths.config == tmp_path / "config" / "app_name"
    assert paths.cache == tmp_path / "cache" / "app_name"
    assert paths.data == tmp_path / "data" / "app_name"
    assert paths.data_local == tmp_path / "data-local" / "app_name"
    assert paths.preference == tmp_path / "prefs" / "app_name"
    assert fake_base_dirs.calls == ["app_name"]


def test_resolve_creates_nothing(fake_base_dirs, tmp_path: Path) -> None:
    resolve("app_name", fake_base_dirs)
    assert not (tmp_path / "config").exists()


def test_resolve_is_deterministic(fake_base_dirs) -> None:
    assert resolve("x", fake_base_dirs) == resolve("x", fake_base_dirs)


@pytest.mark.parametrize("name", ["", "   ", ".", "..", "foo/bar", "foo\\bar", "nul\0byte"])
def test_invalid_identifiers(fake_base_dirs, name: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        resolve(name, fake_base_dirs)
    assert fake_base_dirs.calls == []


@pytest.mark.parametrize("name", ["app", "My App", "app.name", "app-name_2"])
def test_valid_identifiers(name: str) -> None:
    assert validate_identifier(name) == name


def test_invalid_identifier_is_value_error() -> None:
    with pytest.raises(ValueError):
        validate_identifier("a/b")
