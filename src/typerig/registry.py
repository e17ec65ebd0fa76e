"""
TypeRig - Type Registry.

Maps fully-qualified type names to TypeDescriptors for one session
generation. The first descriptor registered under a name wins; later
duplicates are dropped. There is no partial invalidation: clear() is the
only way to remove entries.
"""

import logging
from collections.abc import Iterator

from typerig.types import TypeDescriptor

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Fully-qualified name -> TypeDescriptor."""

    def __init__(self) -> None:
        self._types: dict[str, TypeDescriptor] = {}

    def add(self, descriptor: TypeDescriptor) -> bool:
        """Register a descriptor. Returns False if the name was already taken."""
        if descriptor.fq_name in self._types:
            logger.debug(
                f"Registry: {descriptor.fq_name} already loaded from "
                f"{self._types[descriptor.fq_name].artifact_file}, skipping"
            )
            return False
        self._types[descriptor.fq_name] = descriptor
        return True

    def get(self, fq_name: str) -> TypeDescriptor | None:
        return self._types.get(fq_name)

    def clear(self) -> None:
        self._types.clear()

    def names(self) -> list[str]:
        return list(self._types)

    def __contains__(self, fq_name: object) -> bool:
        return fq_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(list(self._types.values()))
