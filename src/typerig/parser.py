"""
TypeRig - Command parser.

Turns one line of operator input into a Command. Grammar:

    $Quit | $Map | $Refresh | $Set <type name>      session directives
    Get <property> | Get *                          read
    Set <property> = <value>                        write
    Invoke <method> [args...]                       (parsed, not supported)

Tokens are split shell-style, so values with spaces can be quoted:
    Set name = "Sunday brunch"

Arguments are pushed onto Command.arguments in an order that lets the
handler pop() them in the order it needs (property name before value).
"""

import shlex

from typerig.errors import CommandValidationError
from typerig.types import Command, SessionDirective, Verb

SESSION_PREFIX = "$"
ASSIGN = "="


def tokenize(text: str) -> list[str]:
    """Split input into tokens; quoted tokens keep their spaces."""
    try:
        return shlex.split(text, posix=True)
    except ValueError as e:
        raise CommandValidationError(f"Invalid input: {e}") from e


def _parse_verb(token: str) -> Verb:
    title = token.lower().title()
    for verb in Verb:
        if verb is not Verb.UNKNOWN and verb.value == title:
            return verb
    raise CommandValidationError(f"Invalid command: {title}")


def _build_get(cmd: Command, tokens: list[str]) -> None:
    # Get <property> | Get *  (extra tokens are ignored)
    if len(tokens) < 2:
        raise CommandValidationError(f"Invalid command argument: {cmd.verb.value}. Provide property-name or '*' ?")
    cmd.arguments.append(tokens[1])


def _build_set(cmd: Command, tokens: list[str]) -> None:
    # Set <left> = <right>  (extra tokens are ignored)
    if ASSIGN not in tokens:
        raise CommandValidationError(f"Invalid command: {cmd.verb.value}. Assignment ?")
    idx = tokens.index(ASSIGN)
    if idx + 1 >= len(tokens):
        raise CommandValidationError(f"Invalid command: {cmd.verb.value}. No right-hand operand.")
    if idx <= 1:
        raise CommandValidationError(f"Invalid command: {cmd.verb.value}. No left-hand operand.")
    cmd.arguments.append(tokens[idx + 1])
    cmd.arguments.append(tokens[idx - 1])


def parse_command(text: str) -> Command | None:
    """
    Parse and validate one line of input.

    Returns:
        A valid Command, or None for blank input

    Raises:
        CommandValidationError: the line is not a valid command
    """
    tokens = tokenize(text)
    if not tokens:
        return None

    head = tokens[0]
    if head.startswith(SESSION_PREFIX):
        name = head[len(SESSION_PREFIX):].strip().upper()
        return Command(
            is_session=True,
            is_valid=True,
            session_command=SessionDirective.parse(name),
            raw_session_command=name,
            arguments=list(tokens[1:]),
        )

    cmd = Command(verb=_parse_verb(head))
    if cmd.verb == Verb.SET:
        _build_set(cmd, tokens)
    elif cmd.verb == Verb.GET:
        _build_get(cmd, tokens)
    else:
        cmd.arguments.extend(reversed(tokens[1:]))
    cmd.is_valid = True
    return cmd
