"""
Tests for the ReviewForge command line.

Commands run through typer's CliRunner against a temporary project with
the JSONL backend, so every test also exercises loading the configuration
and the stores from disk.

Organization
------------
- TestInit: Project creation
- TestAddAndReview: Enrolling and recording attempts
- TestQueue / TestSchedule / TestNotify: Planning commands
- TestConfigCommands: config show / config validate
- TestGlobalOptions: --version and --verbose
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from reviewforge.cli.main import app

runner = CliRunner()

T0 = "2024-03-15T12:00:00Z"
T1 = "2024-03-16T12:00:00Z"
T2 = "2024-03-17T12:00:00Z"


def invoke(*args: str):
    return runner.invoke(app, list(args))


@pytest.fixture
def project(temp_dir: Path) -> Path:
    """An initialized project directory."""
    result = invoke("init", "--name", "arabic", "-p", str(temp_dir))
    assert result.exit_code == 0, result.output
    return temp_dir


@pytest.fixture
def enrolled(project: Path) -> Path:
    """A project where u1 has three items, all due on 2024-03-16."""
    result = invoke("add", "u1", "bayt", "kitab", "qalam", "-p", str(project), "--at", T0)
    assert result.exit_code == 0, result.output
    return project


class TestInit:
    """Tests for `reviewforge init`."""

    def test_creates_project(self, temp_dir: Path) -> None:
        result = invoke("init", "--name", "arabic", "-p", str(temp_dir))

        assert result.exit_code == 0
        assert "Initialized project 'arabic'" in result.output
        assert (temp_dir / "reviewforge.yaml").exists()
        assert (temp_dir / ".reviewforge").is_dir()

    def test_name_defaults_to_directory(self, temp_dir: Path) -> None:
        target = temp_dir / "swahili"

        result = invoke("init", "-p", str(target))

        assert result.exit_code == 0
        assert "name: swahili" in (target / "reviewforge.yaml").read_text(encoding="utf-8")

    def test_existing_project_kept(self, project: Path) -> None:
        """A second init does not overwrite without --force."""
        result = invoke("init", "--name", "other", "-p", str(project))

        assert result.exit_code == 0
        assert "Already initialized" in result.output
        assert "name: arabic" in (project / "reviewforge.yaml").read_text(encoding="utf-8")

    def test_force_overwrites(self, project: Path) -> None:
        result = invoke("init", "--name", "other", "--force", "-p", str(project))

        assert result.exit_code == 0
        assert "name: other" in (project / "reviewforge.yaml").read_text(encoding="utf-8")


class TestAddAndReview:
    """Tests for `reviewforge add` and `reviewforge review`."""

    def test_add_reports_first_review(self, project: Path) -> None:
        result = invoke("add", "u1", "kitab", "-p", str(project), "--at", T0)

        assert result.exit_code == 0
        assert "kitab: first review 2024-03-16T12:00:00Z" in result.output
        assert (project / ".reviewforge" / "states.jsonl").exists()

    def test_review_updates_state(self, enrolled: Path) -> None:
        result = invoke(
            "review", "u1", "kitab",
            "--accuracy", "1", "--response-ms", "1800",
            "-p", str(enrolled), "--at", T1,
        )

        assert result.exit_code == 0, result.output
        assert "Review recorded: kitab" in result.output
        assert "1 days" in result.output
        assert "2024-03-17T12:00:00Z" in result.output
        history = (enrolled / ".reviewforge" / "history.jsonl").read_text(encoding="utf-8")
        assert len(history.splitlines()) == 1

    def test_review_with_explicit_quality(self, enrolled: Path) -> None:
        """A failing quality resets the item."""
        result = invoke("review", "u1", "qalam", "--quality", "2", "-p", str(enrolled), "--at", T1)

        assert result.exit_code == 0, result.output
        assert "0/1" in result.output

    def test_review_unknown_item(self, enrolled: Path) -> None:
        """Reviewing an item that was never added is an error."""
        result = invoke("review", "u1", "shams", "--accuracy", "1", "-p", str(enrolled), "--at", T1)

        assert result.exit_code == 1
        assert "RF-STOR-001" in result.output

    def test_review_needs_a_signal(self, enrolled: Path) -> None:
        """Either --accuracy or --quality is required."""
        result = invoke("review", "u1", "kitab", "-p", str(enrolled), "--at", T1)

        assert result.exit_code == 1
        assert "RF-VAL-001" in result.output

    def test_bad_reference_time(self, enrolled: Path) -> None:
        result = invoke("review", "u1", "kitab", "--accuracy", "1", "-p", str(enrolled), "--at", "soon")

        assert result.exit_code == 1
        assert "RF-VAL-001" in result.output


class TestQueue:
    """Tests for `reviewforge queue`."""

    def test_nothing_due(self, enrolled: Path) -> None:
        result = invoke("queue", "u1", "-p", str(enrolled), "--at", T0)

        assert result.exit_code == 0
        assert "Nothing to review for u1" in result.output

    def test_due_items_listed(self, enrolled: Path) -> None:
        result = invoke("queue", "u1", "-p", str(enrolled), "--at", T2)

        assert result.exit_code == 0, result.output
        assert "Review queue for u1 (3 items)" in result.output
        for item_id in ["bayt", "kitab", "qalam"]:
            assert item_id in result.output
        assert "Suggested session: 5 items" in result.output

    def test_limit(self, enrolled: Path) -> None:
        result = invoke("queue", "u1", "--limit", "2", "-p", str(enrolled), "--at", T2)

        assert "(2 items)" in result.output

    def test_no_overdue(self, enrolled: Path) -> None:
        """Items due yesterday are hidden with --no-overdue."""
        result = invoke("queue", "u1", "--no-overdue", "-p", str(enrolled), "--at", T2)

        assert "Nothing to review for u1" in result.output


class TestSchedule:
    """Tests for `reviewforge schedule`."""

    def test_cap_spreads_reviews(self, enrolled: Path) -> None:
        result = invoke("schedule", "u1", "--max-per-day", "2", "-p", str(enrolled), "--at", T0)

        assert result.exit_code == 0, result.output
        assert "Review schedule for u1" in result.output
        assert "2 review days, busiest 2024-03-16 (2)" in result.output
        assert "2024-03-17" in result.output

    def test_unknown_learner(self, project: Path) -> None:
        result = invoke("schedule", "nobody", "-p", str(project), "--at", T0)

        assert result.exit_code == 0
        assert "No items enrolled for nobody" in result.output

    def test_cap_must_be_positive(self, enrolled: Path) -> None:
        result = invoke("schedule", "u1", "--max-per-day", "0", "-p", str(enrolled))

        assert result.exit_code != 0


class TestNotify:
    """Tests for `reviewforge notify`."""

    def test_overdue_reminder(self, enrolled: Path) -> None:
        result = invoke("notify", "u1", "-p", str(enrolled), "--at", T2)

        assert result.exit_code == 0, result.output
        assert "3 Overdue Reviews" in result.output
        assert "09:00" in result.output
        assert "1/day, every 16h" in result.output

    def test_quiet_hours(self, enrolled: Path) -> None:
        result = invoke("notify", "u1", "-p", str(enrolled), "--at", "2024-03-17T23:30:00Z")

        assert "quiet hours" in result.output

    def test_unknown_preference(self, enrolled: Path) -> None:
        result = invoke("notify", "u1", "--preference", "hourly", "-p", str(enrolled), "--at", T2)

        assert result.exit_code == 1
        assert "RF-VAL-001" in result.output


class TestConfigCommands:
    """Tests for `reviewforge config show` and `config validate`."""

    def test_show_summary(self, project: Path) -> None:
        result = invoke("config", "show", "-p", str(project))

        assert result.exit_code == 0
        assert "arabic" in result.output
        assert "Daily cap:" in result.output
        assert "reviewforge.yaml" in result.output

    def test_show_defaults(self, temp_dir: Path) -> None:
        result = invoke("config", "show", "-p", str(temp_dir))

        assert result.exit_code == 0
        assert "Using default configuration" in result.output

    def test_show_json(self, project: Path) -> None:
        result = invoke("config", "show", "--format", "json", "-p", str(project))

        assert result.exit_code == 0
        assert '"max_per_day": 30' in result.output

    def test_show_env_override(self, project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REVIEWFORGE_MAX_DAILY_REVIEWS", "12")

        result = invoke("config", "show", "--format", "json", "-p", str(project))

        assert '"max_per_day": 12' in result.output

    def test_show_unknown_format(self, project: Path) -> None:
        result = invoke("config", "show", "--format", "xml", "-p", str(project))

        assert result.exit_code == 1

    def test_validate_ok(self, project: Path) -> None:
        result = invoke("config", "validate", "-p", str(project))

        assert result.exit_code == 0
        assert "reviewforge.yaml is valid" in result.output

    def test_validate_without_file(self, temp_dir: Path) -> None:
        result = invoke("config", "validate", "-p", str(temp_dir))

        assert result.exit_code == 0
        assert "defaults are valid" in result.output

    def test_validate_bad_value(self, temp_dir: Path) -> None:
        (temp_dir / "reviewforge.yaml").write_text(
            "storage:\n  backend: sqlite\n", encoding="utf-8"
        )

        result = invoke("config", "validate", "-p", str(temp_dir))

        assert result.exit_code == 1
        assert "RF-VAL-002" in result.output


class TestGlobalOptions:
    """Tests for options on the top-level command."""

    def test_version(self) -> None:
        result = invoke("--version")

        assert result.exit_code == 0
        assert "ReviewForge version 1.0.0" in result.output

    def test_verbose_shows_traceback(self, enrolled: Path) -> None:
        result = invoke(
            "--verbose", "review", "u1", "shams", "--accuracy", "1",
            "-p", str(enrolled), "--at", T1,
        )

        assert result.exit_code == 1
        assert "Traceback" in result.output
