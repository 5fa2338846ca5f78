"""Success predicates supplied by the CRUD layer per operation kind."""

from __future__ import annotations

from collections.abc import Callable

StatusValidator = Callable[[int], bool]


def expect_status(*codes: int) -> StatusValidator:
    """Accept exactly the given status codes."""
    accepted = frozenset(codes)

    def validator(status_code: int) -> bool:
        return status_code in accepted

    return validator


def expect_status_class(code: int) -> StatusValidator:
    """Accept any status in the same hundreds class as ``code`` (e.g. 2xx for 200)."""
    status_class = code // 100

    def validator(status_code: int) -> bool:
        return status_code // 100 == status_class

    return validator
