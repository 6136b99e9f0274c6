"""Tests for entrykit.error module.

These tests cover the exception classes, their exit codes and string representations.
"""

from pathlib import Path

import pytest

from entrykit.config.target import DependencyTarget
from entrykit.error import (
    EntrykitError,
    EntrykitConfigError,
    EntrykitFileError,
    EntrykitTimeoutError,
    EntrykitCommandError,
)


pytestmark = [pytest.mark.unit]


class TestEntrykitError:
    def test_base_exception(self):
        """Test that EntrykitError can be instantiated and raised."""
        err = EntrykitError("Test error message")
        assert str(err) == "Test error message"
        assert err.exit_code == 1

    def test_raise_and_catch(self):
        """Test that subclasses are caught as EntrykitError."""
        with pytest.raises(EntrykitError, match="bad timeout"):
            raise EntrykitConfigError("bad timeout")


class TestEntrykitConfigError:
    def test_config_error(self):
        """Test that EntrykitConfigError keeps the offending value."""
        err = EntrykitConfigError("Expected host:port pair, got 'db'", value="db")
        assert err.value == "db"
        assert err.exit_code == 2


class TestEntrykitFileError:
    def test_file_error_message_only(self):
        """Test EntrykitFileError with just a message."""
        err = EntrykitFileError("Root not found")
        assert str(err) == "Root not found"
        assert err.filepath is None
        assert err.exit_code == 1

    def test_file_error_with_path_object(self):
        """Test EntrykitFileError adds a note naming the path."""
        filepath = Path("/home/app/conf/app.properties")
        err = EntrykitFileError("Unable to write", filepath=filepath)
        assert err.filepath == filepath
        assert str(filepath) in err.__notes__[0]

    def test_file_error_with_multiple_filepaths(self):
        """Test EntrykitFileError with a list of filepaths."""
        filepaths = ["/path/one.txt", Path("/path/two.txt")]
        err = EntrykitFileError("Multiple files", filepath=filepaths)
        notes = err.__notes__
        assert "/path/one.txt" in notes[0]
        assert "/path/two.txt" in notes[0]


class TestEntrykitTimeoutError:
    def test_timeout_error(self):
        """Test EntrykitTimeoutError names the target and uses the timeout exit code."""
        target = DependencyTarget(host="cache", port=6379)
        err = EntrykitTimeoutError(target, 5, elapsed=5.02)
        result = str(err)
        assert "cache:6379" in result
        assert "Timeout: 5s" in result
        assert "Elapsed: 5.0s" in result
        assert err.target is target
        assert err.exit_code == 124

    def test_timeout_error_without_elapsed(self):
        """Test EntrykitTimeoutError omits elapsed time when unknown."""
        err = EntrykitTimeoutError(DependencyTarget(host="db", port=5432), 60)
        assert "Elapsed" not in str(err)


class TestEntrykitCommandError:
    def test_command_error(self):
        """Test EntrykitCommandError shows the command and exit code."""
        err = EntrykitCommandError("Command 'myprocess' not found", cmd=["myprocess", "-x"], exit_code=127)
        result = str(err)
        assert "not found" in result
        assert "Exit code: 127" in result
        assert "myprocess -x" in result
        assert err.exit_code == 127

    def test_command_error_defaults(self):
        """Test EntrykitCommandError defaults to the not executable exit code."""
        err = EntrykitCommandError("No command")
        assert err.cmd == []
        assert err.exit_code == 126
