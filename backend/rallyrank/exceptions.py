from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class ValidationError(DomainException):
    """A submission breaks the rules of the sport or of match reporting.

    Always raised before anything is written.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid match submission",
            detail=detail,
            code="validation_error",
        )


class NotFound(DomainException):
    def __init__(self, detail: str, *, code: str = "not_found") -> None:
        super().__init__(
            status_code=404,
            title="Not found",
            detail=detail,
            code=code,
        )


class PlayerNotFound(NotFound):
    def __init__(self, player_id: str) -> None:
        super().__init__(f"player '{player_id}' not found", code="player_not_found")


class MatchNotFound(NotFound):
    def __init__(self, match_id: str) -> None:
        super().__init__(f"match '{match_id}' not found", code="match_not_found")


class InvalidState(DomainException):
    def __init__(self, match_id: str, status: str) -> None:
        super().__init__(
            status_code=409,
            title="Match already resolved",
            detail=f"match '{match_id}' is {status}, not pending",
            code="match_invalid_state",
        )
        self.match_status = status


class Forbidden(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=403,
            title="Forbidden",
            detail=detail,
            code="match_forbidden",
        )


class PersistenceConflict(DomainException):
    def __init__(self, detail: str = "concurrent update detected; reload and retry") -> None:
        super().__init__(
            status_code=409,
            title="Conflicting update",
            detail=detail,
            code="persistence_conflict",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
