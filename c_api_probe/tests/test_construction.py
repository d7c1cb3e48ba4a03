"""
test_construction — Probe creation validates the work directory up front.

Tests verify:
  - An existing regular file → WorkDirNotADirectory.
  - A missing path → WorkDirMetadataInaccessible.
  - A directory → a usable Probe; headers are kept in order.
  - Probe.default() honours ProbeSettings.
"""
import tempfile
from pathlib import Path

import pytest

from c_api_probe import (
    CommandOutput,
    NewProbeError,
    Probe,
    WorkDirMetadataInaccessible,
    WorkDirNotADirectory,
)
from c_api_probe.config import ProbeSettings


def _noop_compile(source_path, exe_path):
    return CommandOutput(returncode=0)


def _noop_run(exe_path):
    return CommandOutput(returncode=0)


class TestWorkDirValidation:
    """Construction fails fast on a bad work directory."""

    def test_regular_file_rejected(self, tmp_path):
        file_path = tmp_path / "foo.txt"
        file_path.write_text("bar\n")

        with pytest.raises(WorkDirNotADirectory) as excinfo:
            Probe([], file_path, _noop_compile, _noop_run)

        assert excinfo.value.path == file_path
        assert "is not a directory" in str(excinfo.value)

    def test_missing_path_rejected(self, tmp_path):
        fake_path = tmp_path / "not_a_real_directory"

        with pytest.raises(WorkDirMetadataInaccessible) as excinfo:
            Probe([], fake_path, _noop_compile, _noop_run)

        assert isinstance(excinfo.value.error, FileNotFoundError)

    def test_errors_share_base_class(self, tmp_path):
        with pytest.raises(NewProbeError):
            Probe([], tmp_path / "missing", _noop_compile, _noop_run)

    def test_directory_accepted(self, tmp_path):
        probe = Probe(["<stdint.h>", '"mylib.h"'], str(tmp_path), _noop_compile, _noop_run)

        assert probe.work_dir == tmp_path
        assert probe.headers == ("<stdint.h>", '"mylib.h"')
        assert "Probe(work_dir=" in repr(probe)

    def test_headers_are_copied(self, tmp_path):
        """Mutating the caller's list afterwards does not change the probe."""
        headers = ["<stdint.h>"]
        probe = Probe(headers, tmp_path, _noop_compile, _noop_run)
        headers.append("<stdio.h>")

        assert probe.headers == ("<stdint.h>",)

    def test_no_new_attributes(self, tmp_path):
        probe = Probe([], tmp_path, _noop_compile, _noop_run)

        with pytest.raises(AttributeError):
            probe.extra = 1


class TestDefaultProbe:
    """Probe.default() builds from settings."""

    def test_defaults_to_temp_dir(self):
        probe = Probe.default(ProbeSettings())

        assert probe.work_dir == Path(tempfile.gettempdir())
        assert probe.headers == ()

    def test_settings_are_applied(self, tmp_path):
        settings = ProbeSettings(WORK_DIR=tmp_path, HEADERS=["<stdint.h>"])
        probe = Probe.default(settings)

        assert probe.work_dir == tmp_path
        assert probe.headers == ("<stdint.h>",)

    def test_bad_configured_work_dir(self, tmp_path):
        settings = ProbeSettings(WORK_DIR=tmp_path / "nope")

        with pytest.raises(WorkDirMetadataInaccessible):
            Probe.default(settings)
