"""Schedule command - Plan upcoming reviews under a daily cap."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.engine import ReviewSchedule
from reviewforge.engine.timestamps import calendar_day


class ScheduleCommand(ReviewForgeCommand):
    """Plan every item's next review."""

    def execute(
        self,
        user_id: str,
        max_per_day: Optional[int] = None,
        project: Optional[Path] = None,
        at: Optional[str] = None,
    ) -> int:
        try:
            now = self.resolve_now(at)
            service = self.build_service(self.load_config(project))
            schedules = service.schedule_reviews(user_id, now, max_per_day)
        except ReviewForgeError as e:
            return self.handle_error(e, f"While scheduling reviews for {user_id}")

        if not schedules:
            self.print_info(f"No items enrolled for {user_id}")
            return 0

        self.console.print(self._build_table(user_id, schedules))
        per_day = Counter(calendar_day(s.scheduled_date) for s in schedules)
        busiest_day, busiest = max(per_day.items(), key=lambda kv: (kv[1], kv[0]))
        self.print_info(
            f"{len(per_day)} review days, busiest {busiest_day.isoformat()} ({busiest})"
        )
        return 0

    def _build_table(self, user_id: str, schedules: List[ReviewSchedule]) -> Table:
        table = Table(title=f"Review schedule for {user_id}")
        table.add_column("Date", style="cyan")
        table.add_column("Item")
        table.add_column("Priority", justify="right")
        table.add_column("Type")

        ordered = sorted(
            schedules, key=lambda s: (s.scheduled_date, -s.priority, s.item_id)
        )
        for schedule in ordered:
            table.add_row(
                calendar_day(schedule.scheduled_date).isoformat(),
                schedule.item_id,
                str(schedule.priority),
                schedule.review_type.value,
            )
        return table


def command(
    user_id: str = typer.Argument(..., help="Learner identifier"),
    max_per_day: Optional[int] = typer.Option(
        None, "--max-per-day", "-c", min=1, help="Daily review cap"
    ),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Reference time (ISO-8601 or epoch; default: now)"
    ),
) -> None:
    """Plan a learner's upcoming reviews, spreading overflow to later days.

    Examples:
        reviewforge schedule u1
        reviewforge schedule u1 --max-per-day 20
    """
    exit_code = ScheduleCommand().execute(user_id, max_per_day, project, at)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
