"""
TypeRig - Session Manager.

Owns the session state: the type registry, the active type and its live
instance. At most one active instance exists at any time.

Lifecycle:
    session = SessionManager(source_folder, console)
    await session.init()              # scan, compile, load (no purge)
    session.switch_context("dining_filter_query.DiningFilterQuery")
    ...                               # dispatch GET/SET against current_object
    session.recycle()                 # back to empty, ready for refresh()

Refresh pipeline:
    for each source unit (sequentially):
        compile   (worker thread, awaited)   -> failure: log, next unit
        load      (worker thread, awaited)   -> failure: log, next unit

One bad unit never blocks the others and never removes types already
registered from other units.
"""

import asyncio
import logging
import threading
from pathlib import Path

from typerig.compiler import ArtifactCompiler, artifact_path
from typerig.console import NO_CONTEXT_PROMPT, ConsoleHelper
from typerig.errors import ActivationError, TypeNotFoundError
from typerig.loader import TypeLoader
from typerig.reflection import all_properties
from typerig.registry import TypeRegistry
from typerig.types import Command, Feedback, SessionDirective, TypeDescriptor

logger = logging.getLogger(__name__)

SOURCE_PATTERN = "*.py"


class SessionManager:
    """
    Session state plus the compile/load pipeline that populates it.

    Args:
        source_folder: folder scanned for source units
        console: presentation layer for operator feedback
        compiler: builds units into artifacts (py_compile by default)
        loader: loads artifacts into the registry
        skip_if_exists: reuse existing artifacts instead of rebuilding
        recursive: also scan sub-folders of source_folder
    """

    def __init__(
        self,
        source_folder: Path | str,
        console: ConsoleHelper,
        compiler: ArtifactCompiler | None = None,
        loader: TypeLoader | None = None,
        skip_if_exists: bool = True,
        recursive: bool = False,
    ):
        self.source_folder = Path(source_folder)
        self._console = console
        self._compiler = compiler or ArtifactCompiler()
        self._loader = loader or TypeLoader()
        self.skip_if_exists = skip_if_exists
        self.recursive = recursive

        self._cancel = threading.Event()
        self._types = TypeRegistry()
        self._current: TypeDescriptor | None = None
        self._current_object: object | None = None

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def registry(self) -> TypeRegistry:
        return self._types

    @property
    def current_descriptor(self) -> TypeDescriptor | None:
        return self._current

    @property
    def current_type(self) -> str | None:
        """Fully-qualified name of the active type, if any."""
        return self._current.fq_name if self._current else None

    @property
    def current_object(self) -> object | None:
        return self._current_object

    @property
    def has_context(self) -> bool:
        return self._current is not None and self._current_object is not None

    # =========================================================================
    # Session commands
    # =========================================================================

    def command(self, cmd: Command) -> bool:
        """
        Handle a session directive ($Quit, $Map, $Set <type>, $Refresh).

        Returns:
            False when the session should end, True otherwise
        """
        directive = cmd.session_command
        if directive == SessionDirective.QUIT:
            self._console.show_message("Bye !", Feedback.ECHO)
            return False

        if directive == SessionDirective.MAP:
            self.dump_map()
        elif directive == SessionDirective.SET:
            if not cmd.arguments:
                self._console.show_message("$Set requires a type name. Use $Map to list loaded types.", Feedback.WARNING)
            else:
                self.switch_context(cmd.arguments.pop())
        elif directive == SessionDirective.REFRESH:
            asyncio.run(self.refresh(purge=True))
            self._console.prompter = NO_CONTEXT_PROMPT
            self._console.show_message(f"Session refreshed: {len(self._types)} type(s) loaded.", Feedback.SUCCESS)
        else:
            name = cmd.raw_session_command or directive.value
            self._console.show_message(f"Invalid Session command [{name}] !", Feedback.ERROR)
        return True

    def dump_map(self) -> None:
        """List every loaded type and its public properties."""
        if not len(self._types):
            self._console.show_message("No types loaded.", Feedback.DULL)
            return
        for descriptor in self._types:
            self._console.show_message(f"[{descriptor.fq_name}] - {descriptor.kind.value}", Feedback.SUCCESS)
            for prop in all_properties(descriptor.cls):
                self._console.show_message(f"\t{prop}", Feedback.DULL)

    def switch_context(self, fq_name: str) -> bool:
        """
        Instantiate the named type and make it the active context.

        The previous context (and prompt) is only replaced once the new
        instance has been constructed.
        """
        logger.info(f"Attempting to switch context to a new instance: {fq_name}")
        try:
            descriptor, instance = self.activate(fq_name)
        except TypeNotFoundError:
            self._console.show_message(
                f"Unable to locate the type [{fq_name}] in current session ! Please use $Map to verify loaded types.",
                Feedback.WARNING,
            )
            return False
        except ActivationError:
            logger.exception(f"Unable to create an instance of type [{fq_name}]")
            self._console.show_message(
                f"Unable to create an instance of type [{fq_name}]! Please inspect the logs.",
                Feedback.ERROR,
            )
            return False

        self._current = descriptor
        self._current_object = instance
        self._console.prompter = f"[{descriptor.type_name}] >"
        self._console.refresh_prompt(with_new_line=True)
        return True

    def activate(self, fq_name: str) -> tuple[TypeDescriptor, object]:
        """
        Look up a type and construct it with no arguments.

        Session state is not touched.

        Raises:
            TypeNotFoundError: the name is not in the registry
            ActivationError: the constructor raised
        """
        descriptor = self._types.get(fq_name)
        if descriptor is None:
            raise TypeNotFoundError(fq_name)
        try:
            return descriptor, descriptor.cls()
        except Exception as e:
            raise ActivationError(f"{fq_name}: {e}") from e

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def init(self) -> None:
        """Populate the registry and show the no-context prompt."""
        await self.refresh(purge=False)
        self._console.prompter = NO_CONTEXT_PROMPT
        self._console.refresh_prompt()

    def recycle(self) -> None:
        """
        Drop the active context and every registered type.

        Loaded modules cannot be unloaded; they stay resident and are simply
        no longer reachable through the registry.
        """
        logger.info("Initializing a new session (recycle)...")
        self._current = None
        self._current_object = None
        self._types.clear()

    def cancel(self) -> None:
        """Ask an in-flight refresh to stop before the next source unit."""
        self._cancel.set()

    def close(self) -> None:
        self.cancel()
        self.recycle()

    async def refresh(self, purge: bool = True) -> None:
        """
        Rebuild the type map: compile and load every source unit in turn.

        This may be slow; each stage runs on a worker thread and is awaited
        before the next one starts.
        """
        if purge:
            self.recycle()
        self._cancel.clear()

        try:
            sources = self.scan_sources()
        except OSError:
            logger.exception(f"Unable to scan {self.source_folder} for source files")
            return

        for source in sources:
            if self._cancel.is_set():
                logger.warning("Refresh cancelled, remaining source units skipped")
                break

            # Best effort: no retries or attempt to correct anything
            try:
                if not await asyncio.to_thread(self.compile_source, source):
                    logger.warning(f"Compiling {source} has failed. Please inspect the log for additional details.")
                    continue

                if not await asyncio.to_thread(self.parse_binary, source):
                    logger.error(f"Loading/Parsing artifact for {source} has failed. Please inspect the log for additional details.")
            except Exception:
                logger.exception(f"Processing source unit {source} failed, moving on to the next one")

    # =========================================================================
    # Pipeline stages
    # =========================================================================

    def scan_sources(self) -> list[Path]:
        """Source units in the source folder, sorted by path."""
        logger.info(f"Scanning the {self.source_folder} folder for source files...")
        if not self.source_folder.is_dir():
            logger.warning(f"Source folder {self.source_folder} does not exist")
            return []

        pattern = self.source_folder.rglob if self.recursive else self.source_folder.glob
        sources = sorted(
            path for path in pattern(SOURCE_PATTERN)
            if path.is_file() and not path.stem.startswith("_")
        )
        for path in sources:
            logger.info(path.name)
        return sources

    def compile_source(self, source: Path) -> bool:
        """Compile one source unit into its artifact."""
        logger.debug(f"Attempt to compile source file {source}")
        return self._compiler.build(source, skip_if_exists=self.skip_if_exists)

    def parse_binary(self, source: Path) -> bool:
        """Load the artifact built from `source` into the registry."""
        return self._loader.load_into(self._types, artifact_path(source), source)
