"""Notify command - Show reminder advice for a learner."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.engine import NotificationAdvice, ReminderPlan
from reviewforge.engine.timestamps import to_iso


class NotifyCommand(ReviewForgeCommand):
    """Show notification timing, frequency and content."""

    def execute(
        self,
        user_id: str,
        preference: str = "medium",
        project: Optional[Path] = None,
        at: Optional[str] = None,
    ) -> int:
        try:
            now = self.resolve_now(at)
            service = self.build_service(self.load_config(project))
            stats = service.user_stats(user_id, now)
            advice = service.notification_advice(user_id, now, preference, stats)
            reminder = service.due_reminder(user_id, now, stats)
        except ReviewForgeError as e:
            return self.handle_error(e, f"While preparing notifications for {user_id}")

        self.console.print(
            Panel(
                advice.content.body,
                title=f"[bold]{advice.content.title}[/bold]",
                border_style="cyan",
            )
        )
        self.console.print(self._build_table(advice, reminder))
        return 0

    def _build_table(self, advice: NotificationAdvice, reminder: ReminderPlan) -> Table:
        table = Table(show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        at = advice.optimal_time
        frequency = advice.frequency
        table.add_row("Best time", f"{at.hour:02d}:{at.minute:02d}")
        table.add_row(
            "Frequency",
            f"{frequency.daily_notifications}/day, every {frequency.interval_hours}h",
        )
        table.add_row("Reminder needed", "yes" if frequency.should_send_reminder else "no")
        table.add_row("OK to send now", "yes" if advice.is_appropriate_now else "no (quiet hours)")
        table.add_row(
            "Next reminder",
            f"{to_iso(reminder.scheduled_for)} ({reminder.items_due} due, {reminder.urgency})",
        )
        return table


def command(
    user_id: str = typer.Argument(..., help="Learner identifier"),
    preference: str = typer.Option(
        "medium", "--preference", help="Reminder preference: low, medium or high"
    ),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Reference time (ISO-8601 or epoch; default: now)"
    ),
) -> None:
    """Show when and how to remind a learner about pending reviews.

    Examples:
        reviewforge notify u1
        reviewforge notify u1 --preference high
    """
    exit_code = NotifyCommand().execute(user_id, preference, project, at)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
