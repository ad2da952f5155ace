"""Tests for CLI configuration module."""

import json
import pytest
from pydantic import ValidationError

from cli.config import Config, default_config_path


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.fileslicer' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['default_unit'] == '-b'
    assert config.data['buffer_size'] == 1024 * 1024
    assert config.data['auto_rebuild_name'] == 'rebuilt_archive.zip'
    assert config.data['cleanup_after_auto_rebuild'] is True
    assert config.data['remove_self_after_auto_rebuild'] is False

    with open(config_path, 'r') as f:
        assert json.load(f) == config.data


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file."""
    config_path = tmp_path / '.fileslicer' / 'config.json'
    config_path.parent.mkdir(parents=True)

    existing_data = {
        'default_unit': '-MB',
        'buffer_size': 4096,
    }
    with open(config_path, 'w') as f:
        json.dump(existing_data, f)

    config = Config(config_path)

    assert config.get_default_unit() == '-mb'
    assert config.get_buffer_size() == 4096

    assert config.get_auto_rebuild_name() == 'rebuilt_archive.zip'
    assert config.get_cleanup_config() == {'delete_parts': True, 'remove_self': False}


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.fileslicer' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write('{ invalid json content')

    config = Config(config_path)
    assert config.get_default_unit() == '-b'

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()


@pytest.mark.parametrize('bad_data', [
    {'default_unit': '-tb'},
    {'buffer_size': 0},
    {'auto_rebuild_name': '../escape.zip'},
    ['not', 'an', 'object'],
])
def test_config_rejects_invalid_values(tmp_path, bad_data):
    """Invalid values fall back to defaults and keep a backup."""
    config_path = tmp_path / '.fileslicer' / 'config.json'
    config_path.parent.mkdir(parents=True)
    with open(config_path, 'w') as f:
        json.dump(bad_data, f)

    config = Config(config_path)

    assert config.data == Config.DEFAULT_CONFIG
    assert config_path.with_suffix('.json.bak').exists()


def test_config_update_saves(temp_config):
    """Test that update validates and persists values."""
    temp_config.update(buffer_size=2048, remove_self_after_auto_rebuild=True)

    with open(temp_config.config_path, 'r') as f:
        data = json.load(f)
    assert data['buffer_size'] == 2048
    assert data['remove_self_after_auto_rebuild'] is True
    assert temp_config.get_cleanup_config()['remove_self'] is True


def test_config_update_rejects_invalid_value(temp_config):
    with pytest.raises(ValidationError):
        temp_config.update(default_unit='-xb')

    assert temp_config.get_default_unit() == '-b'


def test_default_config_path_honours_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('FILESLICER_CONFIG', str(tmp_path / 'custom.json'))
    assert default_config_path() == tmp_path / 'custom.json'

    monkeypatch.delenv('FILESLICER_CONFIG')
    assert default_config_path().parts[-2:] == ('.fileslicer', 'config.json')


def test_config_directory_created_if_missing(tmp_path):
    """Test that config directory is created if it doesn't exist."""
    config_path = tmp_path / 'nested' / 'deep' / '.fileslicer' / 'config.json'

    assert not config_path.parent.exists()

    config = Config(config_path)
    assert config_path.parent.exists()
    assert config_path.exists()
