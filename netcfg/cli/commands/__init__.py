"""
CLI команды.

- run.py: run (рассылка команд, --dry-run)
"""

from .run import cmd_run

__all__ = [
    "cmd_run",
]
