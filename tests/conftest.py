"""Shared pytest fixtures for all tests."""

import pytest
from pathlib import Path

import cli.commands
from cli.config import Config
from common.logging_config import reset_logging


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Keep every test away from the user's config file and global CLI state.
    """
    monkeypatch.setenv('FILESLICER_CONFIG', str(tmp_path / 'home-config' / 'config.json'))
    monkeypatch.setattr(cli.commands, '_config', None)
    yield
    reset_logging('cli', 'slicer')


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Returns:
        Path to temporary .fileslicer directory
    """
    config_dir = tmp_path / '.fileslicer'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def make_source(tmp_path):
    """
    Factory writing a source file with the given content.

    Returns:
        Callable taking bytes (and an optional name) and returning the file Path
    """
    def _make(content: bytes, name: str = 'source.zip') -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def ten_byte_source(make_source):
    """Source file holding bytes 0..9."""
    return make_source(bytes(range(10)))


@pytest.fixture
def parts_dir(tmp_path):
    """Empty directory for part files (created by the splitter when missing)."""
    return tmp_path / 'parts'
