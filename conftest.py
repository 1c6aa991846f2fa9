import sys
from pathlib import Path

import pytest

# Make 'src' importable without installing the package
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def fake_base_dirs(tmp_path: Path):
    """A ``base_dirs`` collaborator rooted in ``tmp_path``; records its calls."""
    from kettle.paths import BaseDirs

    calls: list[str] = []

    def base_dirs(app_name: str) -> BaseDirs:
        calls.append(app_name)
        return BaseDirs(
            config_root=tmp_path / "config",
            cache_root=tmp_path / "cache",
            data_root=tmp_path / "data",
            data_local_root=tmp_path / "data-local",
            preference_root=tmp_path / "prefs",
        )

    base_dirs.calls = calls
    return base_dirs


@pytest.fixture(autouse=True)
def kettle_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real user directories."""
    home = tmp_path / "kettle-home"
    monkeypatch.setenv("KETTLE_HOME", str(home))
    return home
