"""
TypeRig - Property introspection.

A "property" of a loaded type is a public, named data member declared in a
class body, either as an annotated attribute or as a `property` object:

    @dataclass
    class DiningFilterQuery:
        guests: int = 0                 # annotated attribute
        room: int | None = None         # annotated attribute (nullable)

        @property
        def identifier(self) -> str:   # read-only property
            ...

Declared properties are those a class defines itself; "all" properties also
walk the base classes (MRO order, most-derived first, first name wins).
`ClassVar` annotations and names starting with "_" are not properties.
"""

import dataclasses
import inspect
import typing
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin


@dataclass(frozen=True)
class PropertyInfo:
    """One public property of a type."""

    name: str
    owner: type
    annotation: Any = Any
    readonly: bool = False
    computed: bool = False  # backed by a `property` object

    @property
    def type_label(self) -> str:
        if self.annotation is Any:
            return "Any"
        if isinstance(self.annotation, type):
            return self.annotation.__name__
        return str(self.annotation).replace("typing.", "")

    def __str__(self) -> str:
        return f"{self.name}: {self.type_label}"


def _resolved_annotations(cls: type) -> dict[str, Any]:
    """The class's own annotations; string annotations that cannot be evaluated become Any."""
    try:
        raw = inspect.get_annotations(cls)
    except Exception:
        return {}
    namespace = {key: value for key, value in vars(cls).items() if not key.startswith("__")}

    resolved = {}
    for name, annotation in raw.items():
        if isinstance(annotation, str):
            annotation = _evaluate_annotation(cls, name, annotation, namespace)
        resolved[name] = annotation
    return resolved


def _evaluate_annotation(cls: type, name: str, annotation: str, namespace: dict[str, Any]) -> Any:
    # One annotation per stub class, so a bad one only affects its own property.
    # get_type_hints looks in the module globals before the class namespace:
    # a field named like its type (`date: date | None = None`) resolves to the type.
    stub = type(
        cls.__name__,
        (),
        {**namespace, "__module__": cls.__module__, "__annotations__": {name: annotation}},
    )
    try:
        return typing.get_type_hints(stub).get(name, Any)
    except Exception:
        return Any


def _is_classvar(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _is_frozen(cls: type) -> bool:
    return dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen


def _return_annotation(prop: property) -> Any:
    if prop.fget is None:
        return Any
    try:
        hints = typing.get_type_hints(prop.fget)
    except Exception:
        return Any
    return hints.get("return", Any)


def declared_properties(cls: type) -> list[PropertyInfo]:
    """Public properties defined in `cls` itself, in declaration order."""
    frozen = _is_frozen(cls) or issubclass(cls, tuple)
    found: dict[str, PropertyInfo] = {}

    for name, annotation in _resolved_annotations(cls).items():
        if name.startswith("_") or _is_classvar(annotation):
            continue
        found[name] = PropertyInfo(name=name, owner=cls, annotation=annotation, readonly=frozen)

    for name, member in vars(cls).items():
        if name.startswith("_") or not isinstance(member, property):
            continue
        found[name] = PropertyInfo(
            name=name,
            owner=cls,
            annotation=_return_annotation(member),
            readonly=frozen or member.fset is None,
            computed=True,
        )
    return list(found.values())


def all_properties(cls: type) -> list[PropertyInfo]:
    """Public properties of `cls` including inherited ones."""
    found: dict[str, PropertyInfo] = {}
    for klass in cls.__mro__:
        if klass is object:
            continue
        for info in declared_properties(klass):
            found.setdefault(info.name, info)
    return list(found.values())


def find_declared_property(cls: type, name: str) -> PropertyInfo | None:
    """Exact-name lookup among the properties `cls` declares itself."""
    for info in declared_properties(cls):
        if info.name == name:
            return info
    return None
