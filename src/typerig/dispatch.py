"""
TypeRig - Dispatch handlers.

A dispatch handler turns an operator Command into reads and writes on the
session's active instance. Only property access is supported:

    > Get guests            read one declared property
    > Get *                 read every property (inherited included)
    > Set guests = 4        write one declared property (string -> typed value)

All values typed by the operator arrive as strings and are coerced to the
property's declared type (see typerig.coercion).
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from typerig.coercion import coerce, format_value
from typerig.console import ConsoleHelper
from typerig.errors import (
    CoercionError,
    PropertyNotFoundError,
    ReadOnlyPropertyError,
    UnsupportedOperationError,
)
from typerig.reflection import PropertyInfo, all_properties, find_declared_property
from typerig.types import Command, Feedback, Verb

logger = logging.getLogger(__name__)

WILDCARD = "*"


def _read(instance: object, info: PropertyInfo) -> Any:
    # Declared-only fields may have no value yet; getter failures propagate
    if info.computed:
        return getattr(instance, info.name)
    return getattr(instance, info.name, None)


class DispatchHandler(ABC):
    """
    Capability interface every command handler implements.

    A handler is stateless across commands: `dispatch` receives the active
    instance each time and the property operations act on that instance.
    """

    @abstractmethod
    def dispatch(self, instance: object, cmd: Command) -> bool:
        """Run one command against `instance`. Returns True on success."""
        ...

    @abstractmethod
    def get_property(self, property_name: str) -> str:
        ...

    @abstractmethod
    def get_all_properties(self) -> list[tuple[str, str]]:
        ...

    @abstractmethod
    def set_property(self, property_name: str, value: str) -> bool:
        ...

    @abstractmethod
    def invoke(self, method_name: str, *args: Any) -> Any:
        ...


class SimpleDispatchHandler(DispatchHandler):
    """
    Handler supporting GET and SET on properties only.

    Single-property GET/SET only see properties the instance's class declares
    itself, while GET * lists inherited properties too.
    """

    def __init__(self, console: ConsoleHelper):
        self._console = console
        self._instance: object | None = None

    @property
    def instance(self) -> object | None:
        return self._instance

    def bind(self, instance: object) -> None:
        """Make `instance` the target of the property operations."""
        self._instance = instance

    # =========================================================================
    # Command dispatch
    # =========================================================================

    def dispatch(self, instance: object, cmd: Command) -> bool:
        self.bind(instance)

        if cmd.verb == Verb.GET:
            return self._dispatch_get(cmd.arguments.pop())
        if cmd.verb == Verb.SET:
            property_name = cmd.arguments.pop()
            value = cmd.arguments.pop()
            return self._dispatch_set(property_name, value)
        if cmd.verb == Verb.INVOKE:
            method_name = cmd.arguments.pop() if cmd.arguments else ""
            try:
                self.invoke(method_name, *reversed(cmd.arguments))
            except UnsupportedOperationError as e:
                self._console.show_message(f"Invoke [{method_name}]: {e}", Feedback.WARNING)
            return False

        self._console.show_message(
            f"Command [{cmd.verb.value}] not supported by SimpleDispatchHandler handler class.",
            Feedback.WARNING,
        )
        return False

    def _dispatch_get(self, property_name: str) -> bool:
        if property_name == WILDCARD:
            try:
                rows = self.get_all_properties()
            except Exception:
                logger.exception("There has been an error reading all properties [GET *]")
                self._console.show_message(
                    "There has been an error reading all properties [GET *]. Please inspect the logs.",
                    Feedback.WARNING,
                )
                return False
            self._console.show_tabular_data(rows, 2)
            return True

        try:
            result = self.get_property(property_name)
        except PropertyNotFoundError as e:
            self._console.show_message(str(e), Feedback.WARNING)
            return False
        except Exception as e:
            logger.exception(f"There has been an error reading property [{property_name}]")
            self._console.show_message(
                f"Error reading [{property_name}]: {e}. Please inspect the logs for additional details.",
                Feedback.WARNING,
            )
            return False

        self._console.show_message(f"\t{property_name}={result}", Feedback.ECHO)
        return True

    def _dispatch_set(self, property_name: str, value: str) -> bool:
        try:
            self.set_property(property_name, value)
        except (PropertyNotFoundError, ReadOnlyPropertyError, CoercionError) as e:
            self._console.show_message(f"Error setting [{property_name}]: {e}.", Feedback.WARNING)
            return False
        except Exception as e:
            logger.exception(f"There has been an error SET-ing a value for property [{property_name}]")
            self._console.show_message(
                f"Error setting [{property_name}]: {e}. Please inspect the logs for additional details.",
                Feedback.WARNING,
            )
            return False

        self._console.show_message("√ Ok", Feedback.CONFIRMATION)
        return True

    # =========================================================================
    # Property operations
    # =========================================================================

    def _target(self) -> object:
        if self._instance is None:
            raise RuntimeError("No instance bound to the dispatch handler")
        return self._instance

    def _declared(self, property_name: str) -> PropertyInfo:
        cls = type(self._target())
        info = find_declared_property(cls, property_name)
        if info is None:
            raise PropertyNotFoundError(f"Invalid property [{property_name}] for class {cls.__qualname__}")
        return info

    def get_property(self, property_name: str) -> str:
        """Display text of one declared property of the bound instance."""
        instance = self._target()
        logger.debug(f"Attempt to read property value [{property_name}] for current instance of {type(instance)}")
        info = self._declared(property_name)
        return format_value(_read(instance, info))

    def get_all_properties(self) -> list[tuple[str, str]]:
        """(name, display text) for every public property, inherited ones included."""
        instance = self._target()
        logger.debug(f"Attempt to read all properties values for current instance of {type(instance)}")
        return [
            (info.name, format_value(_read(instance, info)))
            for info in all_properties(type(instance))
        ]

    def set_property(self, property_name: str, value: str) -> bool:
        """
        Coerce `value` to the declared type of `property_name` and assign it.

        Raises:
            PropertyNotFoundError: no such declared property
            ReadOnlyPropertyError: the property has no setter
            CoercionError: `value` does not convert; the property is unchanged
        """
        instance = self._target()
        logger.debug(f"Attempt to set property value [{property_name}] for current instance of {type(instance)}")
        info = self._declared(property_name)
        if info.readonly:
            raise ReadOnlyPropertyError(f"Property [{property_name}] of {info.owner.__qualname__} is read-only")

        target = info.annotation
        if target is Any:
            # Unannotated: fall back to the type of the current value
            current = _read(instance, info)
            if current is not None:
                target = type(current)

        coerced = coerce(value, target)
        try:
            setattr(instance, info.name, coerced)
        except AttributeError as e:
            raise ReadOnlyPropertyError(f"Property [{property_name}] cannot be assigned: {e}") from e
        return True

    def invoke(self, method_name: str, *args: Any) -> Any:
        """Method invocation is not supported by this handler."""
        raise UnsupportedOperationError("This operation is not currently supported.")
