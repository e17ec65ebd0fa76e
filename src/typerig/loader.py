"""
TypeRig - Type Loader.

Executes a compiled artifact (.pyc) as the module `typerig_units.<stem>`
and registers every type it exports under `<stem>.<qualname>`. Each
TypeDescriptor keeps the module object it came from. Loaded modules stay
resident; recycling the session only drops the logical mapping.

Exported types:
- public classes defined by the module itself (imports are not exported)
- restricted to __all__ when the module defines it
- public classes nested inside exported classes, recursively
"""

import dataclasses
import enum
import importlib.machinery
import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

from typerig.registry import TypeRegistry
from typerig.types import ArtifactKind, TypeDescriptor

logger = logging.getLogger(__name__)

# Set on every module this loader executes
LOADED_MARKER = "__typerig_artifact__"

# sys.modules prefix for loaded units; keeps unit stems out of the import namespace
UNIT_PACKAGE = "typerig_units"


def classify(cls: type) -> ArtifactKind:
    """Enum for enumerations, Struct for value types, Class for everything else."""
    if issubclass(cls, enum.Enum):
        return ArtifactKind.ENUM
    if issubclass(cls, tuple):
        return ArtifactKind.STRUCT
    if dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen:
        return ArtifactKind.STRUCT
    return ArtifactKind.CLASS


def export_types(module: ModuleType) -> Iterator[type]:
    """Yield the exported types of a loaded module, outer classes before nested ones."""
    public_names = getattr(module, "__all__", None)
    for name, obj in vars(module).items():
        if not inspect.isclass(obj) or obj.__module__ != module.__name__:
            continue
        if public_names is not None:
            if name not in public_names:
                continue
        elif name.startswith("_"):
            continue
        yield obj
        yield from _nested_types(obj, module.__name__)


def _nested_types(cls: type, module_name: str) -> Iterator[type]:
    for name, obj in vars(cls).items():
        if name.startswith("_") or not inspect.isclass(obj):
            continue
        if obj.__module__ != module_name or obj.__qualname__ != f"{cls.__qualname__}.{name}":
            continue
        yield obj
        yield from _nested_types(obj, module_name)


class TypeLoader:
    """Loads compiled artifacts into a TypeRegistry."""

    def load_module(self, artifact: Path, unit_name: str | None = None) -> ModuleType:
        """
        Execute an artifact as the module `typerig_units.<stem>`.

        The module is bound in sys.modules so that annotations and dataclass
        machinery can find its globals. Units live under their own prefix and
        never take the place of a regular import. A unit may replace a module
        this loader bound earlier, nothing else.
        """
        name = f"{UNIT_PACKAGE}.{unit_name or artifact.stem}"
        current = sys.modules.get(name)
        if current is not None and not hasattr(current, LOADED_MARKER):
            raise ImportError(f"Module name {name!r} of {artifact} is already taken by an imported module")

        loader = importlib.machinery.SourcelessFileLoader(name, str(artifact))
        spec = importlib.util.spec_from_loader(name, loader)
        if spec is None:
            raise ImportError(f"Cannot build a module spec for {artifact}")
        module = importlib.util.module_from_spec(spec)
        setattr(module, LOADED_MARKER, str(artifact))

        sys.modules[name] = module
        try:
            loader.exec_module(module)
        except BaseException:
            if current is None:
                sys.modules.pop(name, None)
            else:
                sys.modules[name] = current
            raise
        return module

    def load_exports(self, artifact: Path, source: Path) -> list[TypeDescriptor]:
        """Load an artifact and describe every type it exports (raises on failure)."""
        module = self.load_module(artifact)
        # Operator-facing names drop the private prefix: <stem>.<qualname>
        unit_name = artifact.stem
        return [
            TypeDescriptor(
                source_file=source,
                artifact_file=artifact,
                type_name=cls.__name__,
                fq_name=f"{unit_name}.{cls.__qualname__}",
                kind=classify(cls),
                module=module,
                cls=cls,
            )
            for cls in export_types(module)
        ]

    def load_into(self, registry: TypeRegistry, artifact: Path, source: Path) -> bool:
        """
        Load an artifact and add its types to `registry`.

        Names already in the registry are skipped. Any failure is logged and
        reported as False; other artifacts are unaffected.
        """
        logger.debug(f"Attempt to open & parse metadata for binary file {artifact}")
        try:
            descriptors = self.load_exports(artifact, source)
        except Exception:
            logger.exception(f"There has been an error loading the artifact image: {artifact}")
            return False

        for descriptor in descriptors:
            logger.info(f"Loading type: {descriptor.fq_name}")
            registry.add(descriptor)
        return True
