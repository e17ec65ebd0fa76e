"""
TypeRig - Binary Artifact Compiler.

Builds one source unit into a loadable artifact:

    Sources/dining_filter_query.py        (source unit)
    Sources/dining_filter_query.pyc       (artifact)
    Sources/dining_filter_query.error.txt (error report, last build failed)

The error report is removed before every attempt, so its absence means the
last known build succeeded (or was never attempted). Build failures are
logged and reported as False; they never propagate.

Usage:
    compiler = ArtifactCompiler()
    if compiler.build(Path("Sources/dining_filter_query.py"), skip_if_exists=True):
        ...
"""

import logging
import py_compile
import traceback
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

ARTIFACT_SUFFIX = ".pyc"
ERROR_REPORT_SUFFIX = ".error.txt"


def artifact_path(source: Path) -> Path:
    """Deterministic artifact location: same directory, same stem."""
    return source.with_name(f"{source.stem}{ARTIFACT_SUFFIX}")


def error_report_path(source: Path) -> Path:
    """Deterministic error report location: same directory, same stem."""
    return source.with_name(f"{source.stem}{ERROR_REPORT_SUFFIX}")


class CompilerBackend(Protocol):
    """Turns one source file into one artifact; returns diagnostics (empty on success)."""

    def compile(self, source: Path, artifact: Path) -> list[str]: ...


class PyCompileBackend:
    """Backend built on py_compile: byte-compiles the unit without executing it."""

    def compile(self, source: Path, artifact: Path) -> list[str]:
        try:
            py_compile.compile(str(source), cfile=str(artifact), doraise=True)
        except py_compile.PyCompileError as e:
            return [e.msg.strip()]
        return []


class ArtifactCompiler:
    """
    Compiles single-file source units into artifacts.

    Args:
        backend: CompilerBackend to use (py_compile by default)
        rebuild_stale: treat an artifact older than its source as missing
            when skip_if_exists is requested
    """

    def __init__(self, backend: CompilerBackend | None = None, rebuild_stale: bool = False):
        self.backend = backend or PyCompileBackend()
        self.rebuild_stale = rebuild_stale

    def build(self, source: Path, skip_if_exists: bool = False) -> bool:
        """
        Build `source` into its artifact.

        Returns:
            True if the artifact exists at artifact_path(source) afterwards
        """
        artifact = artifact_path(source)
        report = error_report_path(source)

        try:
            # From a previous attempt
            report.unlink(missing_ok=True)
            current = skip_if_exists and self._is_current(source, artifact)
        except OSError:
            logger.exception(f"Unable to prepare the build of {source}")
            return False

        if current:
            logger.info(f"Skipping compilation for existing binary: {artifact}")
            return True

        try:
            diagnostics = self.backend.compile(source, artifact)
        except Exception:
            logger.exception(f"Compiler backend failed on {source}")
            self._fail(artifact, report, traceback.format_exc())
            return False

        if diagnostics:
            details = "\n".join(
                [f"Errors building {source} into {artifact}"]
                + [f"  ≡ {diagnostic}" for diagnostic in diagnostics]
            )
            logger.error(details)
            self._fail(artifact, report, details)
            return False

        logger.info(f"Source {source} built into {artifact} successfully.")
        return True

    def _is_current(self, source: Path, artifact: Path) -> bool:
        if not artifact.exists():
            return False
        if self.rebuild_stale and artifact.stat().st_mtime < source.stat().st_mtime:
            logger.info(f"Binary {artifact} is older than its source, rebuilding")
            return False
        return True

    @staticmethod
    def _fail(artifact: Path, report: Path, details: str) -> None:
        # Nothing loadable may be left behind for a failed build
        try:
            artifact.unlink(missing_ok=True)
            report.write_text(details + "\n", encoding="utf-8")
        except OSError:
            logger.exception(f"Unable to write the error report {report}")
