"""
Todo command parsing.

Commands:
    add <name>      Add a new todo
    list            Show open todos, oldest first
    complete <id>   Mark a todo as completed
"""

from dataclasses import dataclass
from typing import List, Optional, Union

USAGE = """Usage:
    todo add <name>       Add a new todo
    todo list             Show open todos, oldest first
    todo complete <id>    Mark a todo as completed"""


class CommandError(ValueError):
    """Command line could not be turned into a command"""


@dataclass(frozen=True)
class AddCommand:
    name: str


@dataclass(frozen=True)
class ListCommand:
    pass


@dataclass(frozen=True)
class CompleteCommand:
    id: int


Command = Union[AddCommand, ListCommand, CompleteCommand]


def parse_command(command: Optional[str], args: List[str]) -> Command:
    """
    Turn a command name and its arguments into a command

    Args:
        command: Command name, or None when none was given
        args: Remaining positional arguments

    Returns:
        Parsed command

    Raises:
        CommandError: If the command is missing, unknown or malformed
    """
    if command is None:
        raise CommandError("No command found")

    if command == 'add':
        if not args:
            raise CommandError("Missing argument to 'add' command")
        return AddCommand(name=args[0])

    if command == 'list':
        return ListCommand()

    if command == 'complete':
        if not args:
            raise CommandError("Missing argument to 'complete' command")
        id_str = args[0]
        try:
            todo_id = int(id_str)
        except ValueError as e:
            raise CommandError(f"Failed to parse argument as number: {id_str}, {e}") from e
        return CompleteCommand(id=todo_id)

    raise CommandError(f"Unknown command: {command}")
