"""Tests for the CLI command parser."""

import pytest

from cli.models import (
    AutoRebuildCommand,
    CleanupCommand,
    ConfigCommand,
    RebuildCommand,
    ShellCommand,
    SliceCommand,
)
from cli.parser import ParseError, parse_arguments, parse_command
from slicer.part_storage import write_part


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / 'backup.zip'
    path.write_bytes(b'zip content')
    return path


@pytest.fixture
def filled_parts_dir(tmp_path):
    directory = tmp_path / 'parts'
    directory.mkdir()
    write_part(directory / 'part_0.bin', 0, b'data')
    return directory


class TestPositionalArguments:
    """Tests for the '<archive.zip> <dir> <size> [unit]' form."""

    def test_existing_archive_first_slices(self, archive, tmp_path):
        cmd = parse_arguments([str(archive), str(tmp_path / 'parts'), '10', '-mb'])

        assert cmd == SliceCommand(source=str(archive), destination=str(tmp_path / 'parts'), size=10, unit='-mb')

    def test_existing_archive_second_slices(self, archive, tmp_path):
        cmd = parse_arguments([str(tmp_path / 'parts'), str(archive), '512'])

        assert isinstance(cmd, SliceCommand)
        assert cmd.source == str(archive)
        assert cmd.destination == str(tmp_path / 'parts')
        assert cmd.unit == '-b'

    def test_default_unit_comes_from_caller(self, archive, tmp_path):
        cmd = parse_arguments([str(archive), str(tmp_path / 'parts'), '3'], default_unit='-kb')

        assert cmd.unit == '-kb'

    def test_slice_without_size(self, archive, tmp_path):
        with pytest.raises(ParseError) as exc_info:
            parse_arguments([str(archive), str(tmp_path / 'parts')])

        assert exc_info.value.show_usage

    def test_missing_archive_with_parts_rebuilds(self, filled_parts_dir, tmp_path):
        output = tmp_path / 'restored.zip'

        cmd = parse_arguments([str(filled_parts_dir), str(output)])

        assert cmd == RebuildCommand(parts_dir=str(filled_parts_dir), output=str(output))

    def test_missing_archive_without_parts(self, tmp_path):
        empty = tmp_path / 'empty'
        empty.mkdir()

        with pytest.raises(ParseError, match='Incorrect argument combination'):
            parse_arguments([str(empty), str(tmp_path / 'restored.zip')])

    def test_size_with_missing_archive_is_rejected(self, filled_parts_dir, tmp_path):
        with pytest.raises(ParseError, match='Incorrect argument combination'):
            parse_arguments([str(filled_parts_dir), str(tmp_path / 'restored.zip'), '10', '-mb'])

    def test_requires_zip_argument(self, tmp_path):
        with pytest.raises(ParseError, match='has to be .zip'):
            parse_arguments([str(tmp_path / 'a.tar'), str(tmp_path / 'parts'), '10'])

    def test_single_argument(self, archive):
        with pytest.raises(ParseError):
            parse_arguments([str(archive)])

    def test_invalid_size(self, archive, tmp_path):
        with pytest.raises(ParseError, match='Invalid size'):
            parse_arguments([str(archive), str(tmp_path), 'ten'])

    def test_zero_size(self, archive, tmp_path):
        with pytest.raises(ParseError, match='positive'):
            parse_arguments([str(archive), str(tmp_path), '0'])

    def test_unknown_unit(self, archive, tmp_path):
        with pytest.raises(ParseError, match='Unknown unit'):
            parse_arguments([str(archive), str(tmp_path), '10', '-tb'])


class TestNamedArguments:
    """Tests for -s/-r flags and named commands."""

    def test_slice_flag(self, archive, tmp_path):
        cmd = parse_arguments(['-s', str(archive), str(tmp_path / 'parts'), '10', '-MB'])

        assert cmd == SliceCommand(source=str(archive), destination=str(tmp_path / 'parts'), size=10, unit='-mb')

    def test_slice_flag_accepts_any_extension(self, tmp_path):
        source = tmp_path / 'video.mkv'
        source.write_bytes(b'data')

        cmd = parse_arguments(['-s', str(tmp_path / 'parts'), str(source), '1', '-kb'])

        assert cmd.source == str(source)
        assert cmd.destination == str(tmp_path / 'parts')

    def test_rebuild_flag(self, tmp_path):
        cmd = parse_arguments(['-r', str(tmp_path / 'parts'), str(tmp_path / 'out.iso')])

        assert cmd == RebuildCommand(parts_dir=str(tmp_path / 'parts'), output=str(tmp_path / 'out.iso'))

    def test_rebuild_flag_arity(self, tmp_path):
        with pytest.raises(ParseError, match='exactly 2 arguments'):
            parse_arguments(['-r', str(tmp_path)])

    def test_cleanup(self, tmp_path):
        assert parse_arguments(['cleanup', str(tmp_path)]) == CleanupCommand(parts_dir=str(tmp_path))

    def test_config_listing(self):
        assert parse_arguments(['config']) == ConfigCommand()

    def test_config_change(self):
        assert parse_arguments(['config', 'buffer_size', '4096']) == ConfigCommand(key='buffer_size', value='4096')

    def test_config_arity(self):
        with pytest.raises(ParseError, match='config takes'):
            parse_command('config buffer_size')

    def test_shell(self):
        assert parse_arguments(['shell']) == ShellCommand()


class TestNoArguments:
    """Tests for auto-rebuild detection."""

    def test_directory_with_parts(self, filled_parts_dir):
        cmd = parse_arguments([], cwd=filled_parts_dir)

        assert cmd == AutoRebuildCommand(directory=str(filled_parts_dir))

    def test_directory_without_parts(self, tmp_path):
        with pytest.raises(ParseError) as exc_info:
            parse_arguments([], cwd=tmp_path)

        assert exc_info.value.show_usage


class TestShellInput:
    """Tests for parse_command used by the interactive shell."""

    def test_slice(self, archive):
        cmd = parse_command(f'slice {archive} parts 4 -kb')

        assert cmd == SliceCommand(source=str(archive), destination='parts', size=4, unit='-kb')

    def test_quoted_paths(self):
        cmd = parse_command('rebuild "my parts" "out file.zip"')

        assert cmd == RebuildCommand(parts_dir='my parts', output='out file.zip')

    def test_cleanup(self):
        assert parse_command('cleanup parts') == CleanupCommand(parts_dir='parts')

    def test_empty(self):
        with pytest.raises(ParseError, match='Empty command'):
            parse_command('   ')

    def test_unbalanced_quotes(self):
        with pytest.raises(ParseError, match='Invalid syntax'):
            parse_command('rebuild "parts out.zip')

    def test_unknown_command(self):
        with pytest.raises(ParseError, match='Unknown command'):
            parse_command('explode parts')

    def test_slice_arity(self):
        with pytest.raises(ParseError):
            parse_command('slice file.zip parts')
