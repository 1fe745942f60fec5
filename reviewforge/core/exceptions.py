"""
Centralized Exception Hierarchy for ReviewForge.

This module defines all custom exceptions used throughout ReviewForge.
All exceptions inherit from ReviewForgeError for easy catching.

Helpful Error Messages
----------------------
Each exception includes:
- user_message: Human-readable description of what went wrong
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue
- error_code: Unique identifier for documentation lookup (e.g., "RF-VAL-001")

Usage
-----
    from reviewforge.core.exceptions import (
        ReviewForgeError,
        InvalidInputError,
    )

    try:
        update = apply_review(state, event, now=now)
    except InvalidInputError as e:
        return respond(400, e.user_message)

Exception Hierarchy
-------------------
    ReviewForgeError (base)
    ├── ValidationError
    │   ├── InvalidInputError
    │   └── ConfigValidationError
    ├── StorageError
    │   └── RecordNotFoundError
    └── CacheError

Policy
------
The scheduling engine clamps numeric values that fall outside their bounds
(ease factor, interval, priority, mastery). It raises InvalidInputError only
for inputs that cannot be interpreted at all: a state claiming more correct
answers than reviews, a missing identifier, a timestamp that does not parse.
"""

from typing import Any, List, Optional


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows nested __cause__ and __context__ attributes to find
    the original error that started the chain.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class ReviewForgeError(Exception):
    """
    Base exception for all ReviewForge errors.

    Includes helpful error information:
    - error_code: Unique code for documentation lookup (e.g., "RF-ERR-000")
    - why_it_happened: Explanation of the root cause
    - how_to_fix: List of actionable suggestions

    Example
    -------
        try:
            service.submit_review(user_id, item_id, event, now)
        except ReviewForgeError as e:
            logger.error("Review failed", error=str(e))
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "RF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize ReviewForgeError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "RF-VAL-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(message)

        # Override class defaults if provided
        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(ReviewForgeError):
    """
    Raised when validation fails.

    This can occur when:
    - Configuration is invalid
    - Input data doesn't meet requirements
    """

    error_code = "RF-VAL-000"
    why_it_happened = "Validation failed for input data or configuration"
    how_to_fix = [
        "Check the error message for specific validation failures",
        "Review the expected format or value constraints",
    ]


class InvalidInputError(ValidationError):
    """
    Raised when the scheduling engine receives a structurally impossible input.

    Out-of-range numbers are clamped rather than rejected; this error is
    reserved for inputs that cannot be interpreted.

    Example
    -------
        ReviewState(user_id="u1", item_id="w1", review_count=2, correct_answers=5)
        # Raises: InvalidInputError("correct_answers (5) exceeds review_count (2)")
    """

    error_code = "RF-VAL-001"
    why_it_happened = (
        "The review data is internally inconsistent or is missing a required field"
    )
    how_to_fix = [
        "Check that correct_answers never exceeds review_count",
        "Make sure user_id and item_id are non-empty",
        "Pass timestamps as ISO-8601 strings, epoch numbers or datetimes",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class ConfigValidationError(ValidationError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "RF-VAL-002"
    why_it_happened = (
        "A configuration value is invalid. "
        "The reviewforge.yaml file may have incorrect settings"
    )
    how_to_fix = [
        "Check reviewforge.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Run 'reviewforge config show' to view current settings",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Storage Exceptions
# ============================================================================


class StorageError(ReviewForgeError):
    """
    Raised when storage operations fail.

    This can occur when:
    - A data file cannot be read or written
    - A stored record is corrupted
    """

    error_code = "RF-STOR-000"
    why_it_happened = (
        "A storage operation failed. The data file may be corrupted, "
        "locked by another process, or the disk may be full"
    )
    how_to_fix = [
        "Check disk space and file permissions in the data directory",
        "Ensure no other ReviewForge processes are writing the same files",
        "Restore the data directory from a backup if corruption persists",
    ]


class RecordNotFoundError(StorageError):
    """Raised when a review state does not exist for a (user, item) key."""

    error_code = "RF-STOR-001"
    why_it_happened = "The item has not been added to this learner's set"
    how_to_fix = [
        "Add the item first with 'reviewforge add <user> <item>'",
        "Check the user and item identifiers for typos",
    ]

    def __init__(self, user_id: str, item_id: str) -> None:
        super().__init__(f"No review state for user={user_id} item={item_id}")
        self.user_id = user_id
        self.item_id = item_id


class CacheError(ReviewForgeError):
    """Raised when a cache backend misbehaves."""

    error_code = "RF-CACHE-000"
    why_it_happened = "The cache backend rejected an operation"
    how_to_fix = [
        "Check the cache key and value",
        "Run without a cache to bypass it",
    ]
