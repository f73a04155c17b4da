#!/usr/bin/env python3
"""
Todo list command line.

Usage:
    todo add "buy milk"
    todo list
    todo complete 3
    todo --database data/other.duckdb list
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typed_query import Config, DatabaseConfig, setup_logging

from .commands import USAGE, AddCommand, Command, CommandError, CompleteCommand, ListCommand, parse_command
from .repository import TodoRepository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Todo list backed by a relational database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE
    )
    parser.add_argument('--config', type=Path,
                        help='Path to YAML configuration file')
    parser.add_argument('--database',
                        help='Override the database path from the configuration')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('command', nargs='?',
                        help='add, list or complete')
    parser.add_argument('args', nargs='*',
                        help='Command arguments')
    return parser


def print_usage(console: Console) -> None:
    console.print(USAGE)


def run_command(repository: TodoRepository, command: Command, console: Console) -> int:
    """Run one command and report its outcome. Returns the exit code."""
    if isinstance(command, AddCommand):
        repository.add(command.name)
        console.print(f"[green]Added:[/green] {escape(command.name)}")
        return 0

    if isinstance(command, ListCommand):
        todos = repository.list_open()
        if not todos:
            console.print("[dim]Nothing to do[/dim]")
            return 0

        table = Table(title="Open todos", header_style="bold magenta")
        table.add_column("ID", style="bold yellow", justify="right")
        table.add_column("Name", style="white")
        table.add_column("Created", style="blue")
        for todo in todos:
            table.add_row(str(todo.id), escape(todo.name), todo.created_time.strftime('%Y-%m-%d %H:%M'))
        console.print(table)
        return 0

    if isinstance(command, CompleteCommand):
        if repository.complete(command.id):
            console.print(f"[green]Completed:[/green] {command.id}")
            return 0
        console.print(f"[red]No todo with id {command.id}[/red]")
        return 1

    raise TypeError(f"Unknown command: {command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()

    config = Config(args.config)
    if args.debug:
        config.data['logging']['level'] = 'DEBUG'
    setup_logging(config.data)

    try:
        command = parse_command(args.command, args.args)
    except CommandError as e:
        console.print(f"[bold red]{escape(str(e))}[/bold red]")
        print_usage(console)
        return 2

    params = config.connection_params
    if args.database:
        params['database'] = args.database

    with DatabaseConfig.get_connection(config.db_type, params) as connection:
        repository = TodoRepository(connection)
        repository.create_tables()
        return run_command(repository, command, console)


if __name__ == '__main__':
    sys.exit(main())
