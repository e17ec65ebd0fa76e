"""
TypeRig - Shared types.

Plain records passed between the session engine, the dispatcher,
the parser and the console:
- TypeDescriptor: one exported type discovered in a compiled artifact
- Command: a parsed operator command (verb or session directive + argument stack)
- Feedback: message styles understood by the console
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import ModuleType


class ArtifactKind(Enum):
    """How an exported type is classified when it is loaded."""

    CLASS = "Class"
    STRUCT = "Struct"
    ENUM = "Enum"


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Provenance and handle for one exported type.

    `module` is the loaded artifact the type came from; holding it keeps
    the module (and therefore `cls`) alive for the life of the descriptor.
    """

    source_file: Path
    artifact_file: Path
    type_name: str
    fq_name: str
    kind: ArtifactKind
    module: ModuleType = field(repr=False)
    cls: type = field(repr=False)


class Verb(Enum):
    """Commands understood by a dispatch handler."""

    UNKNOWN = "Unknown"
    GET = "Get"
    SET = "Set"
    INVOKE = "Invoke"
    CALLBACK = "Callback"


class SessionDirective(Enum):
    """$-prefixed commands handled by the session manager itself."""

    QUIT = "QUIT"
    MAP = "MAP"
    SET = "SET"
    REFRESH = "REFRESH"
    INVALID = "INVALID"

    @classmethod
    def parse(cls, text: str) -> "SessionDirective":
        try:
            return cls(text.strip().upper())
        except ValueError:
            return cls.INVALID


@dataclass
class Command:
    """
    A command together with its arguments.

    `arguments` is consumed as a stack: the parser pushes with append()
    and handlers take values back with pop().
    """

    verb: Verb = Verb.UNKNOWN
    arguments: list[str] = field(default_factory=list)
    is_valid: bool = False
    is_session: bool = False
    session_command: SessionDirective = SessionDirective.INVALID
    raw_session_command: str = ""


class Feedback(Enum):
    """Message styles for console output."""

    ECHO = "echo"
    CONFIRMATION = "confirmation"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DULL = "dull"
