"""Test configuration and fixtures for PkgKit test suite"""

import os
import sys
import pytest
from pathlib import Path
from unittest.mock import Mock, patch

# Add project root and tests directory to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from pkgkit.platform_utils import PackageManagerKind
from utils import FakePackageManager, FakeRunner


@pytest.fixture
def project_root():
    """Fixture providing path to project root directory"""
    return PROJECT_ROOT


@pytest.fixture(autouse=True)
def clean_pkgkit_env(monkeypatch):
    """Keep host PKGKIT_* settings out of the tests"""
    for key in list(os.environ):
        if key.startswith('PKGKIT_'):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv('SUDO_USER', raising=False)


@pytest.fixture
def list_file(tmp_path, monkeypatch):
    """Package list path inside a temporary directory, wired into the settings"""
    path = tmp_path / 'pkglist'
    monkeypatch.setenv('PKGKIT_LIST_FILE', str(path))
    return path


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_manager():
    """Fake package manager with three installed packages"""
    return FakePackageManager(PackageManagerKind.APT)


@pytest.fixture
def allow_root():
    """Permission check that behaves as if running as root"""
    return Mock(return_value=None)


@pytest.fixture
def mock_subprocess():
    """Mock subprocess for testing system commands"""
    with patch('subprocess.run') as mock_run:
        mock_result = Mock()
        mock_result.returncode = 0
        mock_result.stdout = "success"
        mock_result.stderr = ""
        mock_run.return_value = mock_result
        yield mock_run


# Pytest hooks for better test organization
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
