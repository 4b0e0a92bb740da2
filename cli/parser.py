"""Command parser for console input."""

import shlex

from cli.models import (
    CommandRequest,
    DatabasesCommand,
    DeleteAllCommand,
    DeleteCommand,
    ListCommand,
    ReplicateCommand,
    ShowCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of Replicate/List/Show/Delete/DeleteAll/Databases)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "replicate":
        return _parse_replicate(tokens[1:])
    elif command_name == "list":
        return _parse_list(tokens[1:])
    elif command_name == "show":
        return ShowCommand(directive_id=_single_id("show", tokens[1:]))
    elif command_name == "delete":
        return DeleteCommand(directive_id=_single_id("delete", tokens[1:]))
    elif command_name == "delete-all":
        return _parse_delete_all(tokens[1:])
    elif command_name == "databases":
        return _parse_databases(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_replicate(args: list[str]) -> ReplicateCommand:
    """Parse 'replicate push|pull [flags]' command."""
    if not args:
        raise ParseError("replicate requires a direction: push or pull")

    direction = args[0]
    if direction not in ("push", "pull"):
        raise ParseError(f"Unknown direction: {direction} (expected push or pull)")

    continuous = None
    create_target = None
    for flag in args[1:]:
        if flag == "--continuous":
            continuous = True
        elif flag == "--once":
            continuous = False
        elif flag == "--create-target":
            create_target = True
        elif flag == "--no-create-target":
            create_target = False
        else:
            raise ParseError(f"Unknown option for replicate: {flag}")

    return ReplicateCommand(
        push=direction == "push",
        continuous=continuous,
        create_target=create_target,
    )


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'list' command."""
    if args:
        raise ParseError("list takes no arguments")
    return ListCommand()


def _parse_delete_all(args: list[str]) -> DeleteAllCommand:
    """Parse 'delete-all' command."""
    if args:
        raise ParseError("delete-all takes no arguments")
    return DeleteAllCommand()


def _single_id(command_name: str, args: list[str]) -> str:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: <id>")
    return args[0]


def _parse_databases(args: list[str]) -> DatabasesCommand:
    """Parse 'databases [local|remote]' command."""
    if len(args) > 1:
        raise ParseError("databases takes at most 1 argument: [local|remote]")
    role = args[0] if args else "local"
    if role not in ("local", "remote"):
        raise ParseError(f"Unknown host: {role} (expected local or remote)")
    return DatabasesCommand(role=role)
