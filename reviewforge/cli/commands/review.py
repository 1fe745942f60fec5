"""Review command - Record a review attempt and show the new schedule."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from reviewforge.cli.base import ReviewForgeCommand
from reviewforge.core.exceptions import ReviewForgeError
from reviewforge.engine import ReviewEvent, ReviewState
from reviewforge.engine.timestamps import to_iso


class ReviewCommand(ReviewForgeCommand):
    """Record one review attempt."""

    def execute(
        self,
        user_id: str,
        item_id: str,
        accuracy: Optional[float] = None,
        response_ms: float = 0.0,
        difficulty: int = 3,
        quality: Optional[int] = None,
        hints: bool = False,
        modality: Optional[str] = None,
        project: Optional[Path] = None,
        at: Optional[str] = None,
    ) -> int:
        """Record the attempt and print the updated state.

        Returns:
            0 on success, 1 on error
        """
        try:
            now = self.resolve_now(at)
            service = self.build_service(self.load_config(project))
            event = ReviewEvent(
                accuracy=accuracy,
                response_ms=response_ms,
                difficulty=difficulty,
                quality=quality,
                hints_used=hints,
                modality=modality,
                timestamp=now,
            )
            state = service.submit_review(user_id, item_id, event, now)
        except ReviewForgeError as e:
            return self.handle_error(e, f"While recording a review of {item_id}")

        self.console.print(self._build_table(state))
        return 0

    def _build_table(self, state: ReviewState) -> Table:
        table = Table(title=f"Review recorded: {state.item_id}")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Interval", f"{state.interval} days")
        table.add_row("Next review", to_iso(state.next_review_date))
        table.add_row("Ease factor", f"{state.ease_factor:.2f}")
        table.add_row("Repetitions", str(state.repetitions))
        table.add_row("Mastery", f"{state.mastery_level:.0f}")
        table.add_row("Accuracy", f"{state.correct_answers}/{state.review_count}")
        return table


def command(
    user_id: str = typer.Argument(..., help="Learner identifier"),
    item_id: str = typer.Argument(..., help="Item (word) identifier"),
    accuracy: Optional[float] = typer.Option(
        None, "--accuracy", "-a", min=0.0, max=1.0, help="Fraction correct (0-1)"
    ),
    response_ms: float = typer.Option(
        0.0, "--response-ms", "-r", min=0.0, help="Response time in milliseconds"
    ),
    difficulty: int = typer.Option(
        3, "--difficulty", "-d", min=1, max=5, help="Perceived difficulty (1-5)"
    ),
    quality: Optional[int] = typer.Option(
        None, "--quality", "-q", min=0, max=5, help="Explicit quality (0-5)"
    ),
    hints: bool = typer.Option(False, "--hints", help="Hints were used"),
    modality: Optional[str] = typer.Option(
        None, "--modality", "-m", help="Study modality (audio, visual, ...)"
    ),
    project: Optional[Path] = typer.Option(
        None, "--project", "-p", help="Project directory"
    ),
    at: Optional[str] = typer.Option(
        None, "--at", help="Reference time (ISO-8601 or epoch; default: now)"
    ),
) -> None:
    """Record a review attempt for an item.

    Give either --accuracy (with optional timing and difficulty) or an
    explicit --quality.

    Examples:
        reviewforge review u1 kitab --accuracy 1 --response-ms 1800
        reviewforge review u1 qalam --quality 2
    """
    exit_code = ReviewCommand().execute(
        user_id,
        item_id,
        accuracy,
        response_ms,
        difficulty,
        quality,
        hints,
        modality,
        project,
        at,
    )
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
