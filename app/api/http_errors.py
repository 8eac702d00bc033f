from __future__ import annotations

from collections.abc import Mapping

from fastapi import HTTPException


def value_error(
    exc: ValueError,
    *,
    code_statuses: Mapping[str, int],
    detail_overrides: Mapping[str, str] | None = None,
    default_status: int = 400,
    default_detail: str | None = None,
) -> HTTPException:
    """Translate a service ``ValueError(<code>)`` into an HTTPException.

    Unknown codes fall back to ``default_status`` so a new reason never
    turns into a 500.
    """
    code = str(exc)

    if code in code_statuses:
        detail = (
            detail_overrides[code]
            if detail_overrides and code in detail_overrides
            else code
        )
        return HTTPException(status_code=code_statuses[code], detail=detail)

    return HTTPException(
        status_code=default_status,
        detail=default_detail if default_detail is not None else code,
    )
