"""Queue command - Show the ranked review queue."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.cli.console import tip
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.engine import QueueItem, recommended_session_size
from reviewforge.engine.timestamps import to_iso

PRIORITY_STYLES = {10: "bold red", 9: "red", 8: "yellow", 7: "yellow"}


class QueueCommand(ReviewForgeCommand):
    """Show items due for review."""

    def execute(
        self,
        user_id: str,
        limit: Optional[int] = None,
        include_overdue: bool = True,
        project: Optional[Path] = None,
        at: Optional[str] = None,
    ) -> int:
        try:
            now = self.resolve_now(at)
            config = self.load_config(project)
            service = self.build_service(config)
            queue = service.review_queue(user_id, now, limit, include_overdue)
        except ReviewForgeError as e:
            return self.handle_error(e, f"While building the queue for {user_id}")

        if not queue:
            self.print_info(f"Nothing to review for {user_id}")
            return 0

        self.console.print(self._build_table(user_id, queue))
        size = recommended_session_size(len(queue), config=config.scheduling)
        tip(f"Suggested session: {size} items")
        return 0

    def _build_table(self, user_id: str, queue: List[QueueItem]) -> Table:
        table = Table(title=f"Review queue for {user_id} ({len(queue)} items)")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Item", style="cyan")
        table.add_column("Priority", justify="right")
        table.add_column("Type")
        table.add_column("Due")
        table.add_column("Days since review", justify="right")

        for position, item in enumerate(queue, start=1):
            style = PRIORITY_STYLES.get(item.priority, "white")
            table.add_row(
                str(position),
                item.item_id,
                f"[{style}]{item.priority}[/{style}]",
                item.review_type.value,
                to_iso(item.scheduled_date),
                str(item.days_since_last_review),
            )
        return table


def command(
    user_id: str = typer.Argument(..., help="Learner identifier"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, help="Maximum queue length"
    ),
    include_overdue: bool = typer.Option(
        True, "--overdue/--no-overdue", help="Include items due on earlier days"
    ),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Reference time (ISO-8601 or epoch; default: now)"
    ),
) -> None:
    """Show the items a learner should review now, most urgent first.

    Examples:
        reviewforge queue u1
        reviewforge queue u1 --limit 10 --no-overdue
    """
    exit_code = QueueCommand().execute(user_id, limit, include_overdue, project, at)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
