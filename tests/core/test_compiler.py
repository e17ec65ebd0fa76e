"""
Tests for ArtifactCompiler - building source units into .pyc artifacts.
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

from typerig.compiler import ArtifactCompiler, PyCompileBackend, artifact_path, error_report_path


class TestArtifactPaths:
    """Artifact and error report names derive from the source unit."""

    def test_artifact_path(self):
        assert artifact_path(Path("/src/units/query.py")) == Path("/src/units/query.pyc")

    def test_error_report_path(self):
        assert error_report_path(Path("/src/units/query.py")) == Path("/src/units/query.error.txt")


class TestBuild:
    """Build with the real py_compile backend."""

    def test_build_creates_artifact(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_ok", "x = 1\n")

        assert ArtifactCompiler().build(source) is True
        assert artifact_path(source).exists()
        assert not error_report_path(source).exists()

    def test_syntax_error_writes_report(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_bad", "def broken(:\n    pass\n")

        assert ArtifactCompiler().build(source) is False
        report = error_report_path(source)
        assert report.exists()
        assert report.read_text(encoding="utf-8").startswith(f"Errors building {source}")
        assert not artifact_path(source).exists()

    def test_stale_report_removed_on_success(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_fixed", "x = 1\n")
        error_report_path(source).write_text("old failure")

        assert ArtifactCompiler().build(source) is True
        assert not error_report_path(source).exists()

    def test_backend_returns_diagnostics(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_diag", "def f(:\n")
        diagnostics = PyCompileBackend().compile(source, artifact_path(source))
        assert len(diagnostics) == 1
        assert "SyntaxError" in diagnostics[0] or "invalid syntax" in diagnostics[0]


class TestSkipIfExists:
    """Memoization by artifact presence."""

    def test_existing_artifact_skips_backend(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_cached", "x = 1\n")
        artifact_path(source).write_bytes(b"")
        backend = MagicMock()

        assert ArtifactCompiler(backend=backend).build(source, skip_if_exists=True) is True
        backend.compile.assert_not_called()

    def test_rebuild_twice_without_backend_call(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_twice", "x = 1\n")
        backend = MagicMock(wraps=PyCompileBackend())
        compiler = ArtifactCompiler(backend=backend)

        assert compiler.build(source, skip_if_exists=True) is True
        assert compiler.build(source, skip_if_exists=True) is True
        assert backend.compile.call_count == 1

    def test_without_skip_backend_is_called(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_forced", "x = 1\n")
        artifact_path(source).write_bytes(b"")
        backend = MagicMock()
        backend.compile.return_value = []

        assert ArtifactCompiler(backend=backend).build(source, skip_if_exists=False) is True
        backend.compile.assert_called_once_with(source, artifact_path(source))

    def test_rebuild_stale_artifact(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_stale", "x = 1\n")
        artifact = artifact_path(source)
        artifact.write_bytes(b"")
        older = source.stat().st_mtime - 60
        os.utime(artifact, (older, older))
        backend = MagicMock()
        backend.compile.return_value = []

        assert ArtifactCompiler(backend=backend, rebuild_stale=True).build(source, skip_if_exists=True) is True
        backend.compile.assert_called_once()

    def test_stale_artifact_reused_by_default(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_stale_ok", "x = 1\n")
        artifact = artifact_path(source)
        artifact.write_bytes(b"")
        older = source.stat().st_mtime - 60
        os.utime(artifact, (older, older))
        backend = MagicMock()

        assert ArtifactCompiler(backend=backend).build(source, skip_if_exists=True) is True
        backend.compile.assert_not_called()


class TestFailures:
    """Failures never raise and leave nothing loadable behind."""

    def test_backend_exception(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_crash", "x = 1\n")
        backend = MagicMock()
        backend.compile.side_effect = RuntimeError("backend exploded")

        assert ArtifactCompiler(backend=backend).build(source) is False
        assert "backend exploded" in error_report_path(source).read_text(encoding="utf-8")

    def test_failed_build_removes_old_artifact(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_regressed", "x = 1\n")
        artifact_path(source).write_bytes(b"old")
        backend = MagicMock()
        backend.compile.return_value = ["line 1: bad token"]

        assert ArtifactCompiler(backend=backend).build(source) is False
        assert not artifact_path(source).exists()
        report = error_report_path(source).read_text(encoding="utf-8")
        assert "  ≡ line 1: bad token" in report

    def test_source_removed_before_stale_check(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_vanished", "x = 1\n")
        artifact_path(source).write_bytes(b"old")
        source.unlink()
        backend = MagicMock()

        compiler = ArtifactCompiler(backend=backend, rebuild_stale=True)
        assert compiler.build(source, skip_if_exists=True) is False
        backend.compile.assert_not_called()

    def test_blocked_report_path_fails_the_build(self, tmp_path, write_unit):
        source = write_unit(tmp_path, "rig_noreport", "x = 1\n")
        error_report_path(source).mkdir()
        backend = MagicMock()
        backend.compile.return_value = ["line 1: bad token"]

        # unlink() of a directory fails before the backend is ever called
        assert ArtifactCompiler(backend=backend).build(source) is False
        backend.compile.assert_not_called()
