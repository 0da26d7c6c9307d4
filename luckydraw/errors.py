"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Conflict (e.g., duplicate award id)."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class InvalidPoolError(AppError):
    """Pool import was empty or malformed."""

    def __init__(self, message: str = "Pool has no identifiers", details: Any | None = None) -> None:
        super().__init__(code="invalid_pool", message=message, status_code=400, details=details)


class InvalidAwardConfigError(AppError):
    """Award quota/rounds do not add up."""

    def __init__(self, message: str = "Invalid award configuration", details: Any | None = None) -> None:
        super().__init__(code="invalid_award_config", message=message, status_code=400, details=details)


class AwardNotFoundError(NotFoundError):
    def __init__(self, award_id: str) -> None:
        super().__init__(message=f"Award {award_id!r} not found", details={"award_id": award_id})


class AwardExistsError(ConflictError):
    def __init__(self, award_id: str) -> None:
        super().__init__(message=f"Award {award_id!r} already registered", details={"award_id": award_id})


class AwardCompletedError(AppError):
    """Round requested after the award quota was exhausted."""

    def __init__(self, award_id: str, quota: int) -> None:
        super().__init__(
            code="award_completed",
            message=f"Award {award_id!r} has already drawn all {quota} winners",
            status_code=409,
            details={"award_id": award_id, "quota": quota},
        )


class InsufficientPoolError(AppError):
    """Fewer undrawn identifiers than the round needs."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(
            code="insufficient_pool",
            message=f"Not enough undrawn numbers: need {needed}, have {available}",
            status_code=409,
            details={"needed": needed, "available": available},
        )


class RoundInProgressError(AppError):
    def __init__(self, award_id: str) -> None:
        super().__init__(
            code="round_in_progress",
            message=f"A round is already open for award {award_id!r}",
            status_code=409,
            details={"award_id": award_id},
        )


class RoundNotStartedError(AppError):
    def __init__(self, award_id: str) -> None:
        super().__init__(
            code="round_not_started",
            message=f"No open round for award {award_id!r}",
            status_code=409,
            details={"award_id": award_id},
        )


class NoResultsError(AppError):
    def __init__(self) -> None:
        super().__init__(code="no_results", message="No winners have been drawn yet", status_code=409)


class EngineInvariantError(RuntimeError):
    """Bookkeeping bug inside the draw engine; never handled as a user error."""


class AlreadyDrawnError(EngineInvariantError):
    def __init__(self, identifiers: list[str]) -> None:
        super().__init__(f"Identifiers already drawn or not in pool: {', '.join(identifiers)}")
        self.identifiers = identifiers


class InsufficientCandidatesError(EngineInvariantError):
    def __init__(self, k: int, available: int) -> None:
        super().__init__(f"Cannot sample {k} from {available} candidates")
        self.k = k
        self.available = available


class InvalidRangeError(ValueError):
    """Random integer requested for an empty range."""
