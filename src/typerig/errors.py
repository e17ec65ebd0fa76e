"""
TypeRig - Error taxonomy.

Build and load failures never surface as exceptions (they are logged
and reported as a boolean at the unit boundary). The classes here are
the failures an operator gets to see.
"""


class TypeRigError(Exception):
    """Base class for operator-facing failures."""


class TypeNotFoundError(TypeRigError, LookupError):
    """A type name is not present in the session registry."""


class PropertyNotFoundError(TypeRigError, LookupError):
    """No public property with that name on the active instance."""


class ReadOnlyPropertyError(TypeRigError, AttributeError):
    """The property exists but cannot be assigned."""


class CoercionError(TypeRigError, ValueError):
    """A string value could not be converted to the property's type."""


class ActivationError(TypeRigError):
    """The selected type could not be instantiated."""


class UnsupportedOperationError(TypeRigError, NotImplementedError):
    """The dispatcher does not implement this operation."""


class CommandValidationError(TypeRigError, ValueError):
    """Operator input does not form a valid command."""
