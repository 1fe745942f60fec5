"""Top-level CLI commands."""

from reviewforge.cli.commands.add import command as add_command
from reviewforge.cli.commands.init import command as init_command
from reviewforge.cli.commands.notify import command as notify_command
from reviewforge.cli.commands.queue import command as queue_command
from reviewforge.cli.commands.review import command as review_command
from reviewforge.cli.commands.schedule import command as schedule_command

__all__ = [
    "add_command",
    "init_command",
    "notify_command",
    "queue_command",
    "review_command",
    "schedule_command",
]
