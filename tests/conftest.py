import pytest
from pathlib import Path

from htopsettings.config import ConfigLocationResolver


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Provide an isolated home directory."""
    d = tmp_path / "home"
    d.mkdir()
    return d


@pytest.fixture
def sysconfdir(tmp_path: Path) -> Path:
    """Provide an isolated system configuration directory."""
    d = tmp_path / "etc"
    d.mkdir()
    return d


@pytest.fixture
def resolver(home: Path, sysconfdir: Path) -> ConfigLocationResolver:
    """Resolver that only sees the temporary home and etc directories."""
    return ConfigLocationResolver(environ={"HOME": str(home)}, sysconfdir=str(sysconfdir))
