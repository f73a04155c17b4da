"""
Todo list application built on the typed query layer.
"""

from .models import TODO_TABLE, TodoColumns, TodoCreate, TodoRecord
from .repository import TodoRepository
from .commands import AddCommand, ListCommand, CompleteCommand, CommandError, parse_command

__all__ = [
    'TODO_TABLE',
    'TodoColumns',
    'TodoCreate',
    'TodoRecord',
    'TodoRepository',
    'AddCommand',
    'ListCommand',
    'CompleteCommand',
    'CommandError',
    'parse_command',
]
