"""
Terminal command router.

Maps a typed command onto one of the exercise's registered command
patterns and lets that handler pick a canned response for the current code.

Matching, on the trimmed command:
1. an exact match wins;
2. otherwise the first pattern, in declaration order, where either string
   starts with the other. This lets `kubectl logs web-7d4f` reach a
   `kubectl logs` handler, and also means that when one registered pattern
   is a prefix of another the earlier one takes every command that matches
   both. An empty command is a prefix of every pattern, so it goes to the
   first registered handler when there is one;
3. otherwise the built-ins: help/?, clear, and empty input;
4. otherwise "command not found" with exit code 127.
"""

import structlog

from labcheck.core.i18n import translate
from labcheck.core.models import TerminalResponse
from labcheck.exercises.models import Exercise, TerminalCommandHandler

logger = structlog.get_logger(__name__)

CLEAR_SEQUENCE = "\x1b[2J\x1b[H"
COMMAND_NOT_FOUND_EXIT_CODE = 127


def find_handler(handlers: tuple[TerminalCommandHandler, ...], command: str) -> TerminalCommandHandler | None:
    """Select the handler for an already-trimmed command, or None."""
    for handler in handlers:
        if handler.pattern == command:
            return handler

    for handler in handlers:
        if command.startswith(handler.pattern) or handler.pattern.startswith(command):
            return handler

    return None


def builtin_response(exercise: Exercise, command: str, lang: str | None = None) -> TerminalResponse | None:
    if command in ("help", "?"):
        listing = "\n".join(f"  {pattern}" for pattern in exercise.command_patterns)
        output = f"{translate('terminal_help_header', lang)}\n{listing}\n\n{translate('terminal_help_footer', lang)}"
        return TerminalResponse(output=output, exit_code=0)

    if command == "clear":
        return TerminalResponse(output=CLEAR_SEQUENCE, exit_code=0)

    if command == "":
        return TerminalResponse(output="", exit_code=0)

    return None


def command_not_found(command: str, lang: str | None = None) -> TerminalResponse:
    program = command.split(" ")[0]
    return TerminalResponse(
        output=f"bash: {program}: command not found\n\n{translate('terminal_help_hint', lang)}",
        exit_code=COMMAND_NOT_FOUND_EXIT_CODE,
    )


def route_command(exercise: Exercise, command: str, source: str, lang: str | None = None) -> TerminalResponse:
    """
    Simulate running a command in the exercise's terminal.

    Args:
        exercise: Hydrated exercise whose commands are registered
        command: What the learner typed
        source: The learner's current code
        lang: Optional language for built-in messages

    Returns:
        TerminalResponse with output and exit code
    """
    typed = command.strip()

    handler = find_handler(exercise.terminal_commands, typed)
    if handler is not None:
        logger.debug("Routing terminal command", exercise_id=exercise.id, command=typed, pattern=handler.pattern)
        return handler(source)

    response = builtin_response(exercise, typed, lang)
    if response is not None:
        return response

    logger.debug("Unknown terminal command", exercise_id=exercise.id, command=typed)
    return command_not_found(typed, lang)
