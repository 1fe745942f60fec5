"""Add command - Enroll items in a learner's review set."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.engine.timestamps import to_iso


class AddCommand(ReviewForgeCommand):
    """Enroll items for a learner."""

    def execute(
        self,
        user_id: str,
        item_ids: List[str],
        project: Optional[Path] = None,
        at: Optional[str] = None,
    ) -> int:
        try:
            now = self.resolve_now(at)
            service = self.build_service(self.load_config(project))
            for item_id in item_ids:
                state = service.enroll(user_id, item_id, now)
                self.print_success(
                    f"{item_id}: first review {to_iso(state.next_review_date)}"
                )
        except ReviewForgeError as e:
            return self.handle_error(e, f"While adding items for {user_id}")
        return 0


def command(
    user_id: str = typer.Argument(..., help="Learner identifier"),
    item_ids: List[str] = typer.Argument(..., help="Item (word) identifiers"),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Reference time (ISO-8601 or epoch; default: now)"
    ),
) -> None:
    """Add items to a learner's review set.

    Items that are already enrolled are left unchanged.

    Examples:
        reviewforge add u1 kitab qalam madrasa
    """
    exit_code = AddCommand().execute(user_id, item_ids, project, at)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
