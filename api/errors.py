"""
Client-facing error bodies.

Every failure the API reports on purpose is an HTTPException whose `detail`
is already the JSON body to send, so one handler can render them all:

* 400  {"errors": [{"msg": ...}, ...]}
* 401  {"msg": ...}
* 404  {"msg": "User not found"}
"""
from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status


class ApiError(HTTPException):
    def __init__(self, status_code: int, body: dict[str, Any]) -> None:
        super().__init__(status_code=status_code, detail=body)


class ValidationFailed(ApiError):
    def __init__(self, *messages: str, errors: list[dict[str, Any]] | None = None) -> None:
        items = list(errors or []) + [{"msg": m} for m in messages]
        super().__init__(status.HTTP_400_BAD_REQUEST, {"errors": items})


class Unauthorized(ApiError):
    def __init__(self, msg: str = "Token is not valid") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, {"msg": msg})


class NotFound(ApiError):
    def __init__(self, msg: str = "User not found") -> None:
        super().__init__(status.HTTP_404_NOT_FOUND, {"msg": msg})


SERVER_ERROR_BODY = {"errors": [{"msg": "Server Error"}]}


def validation_items(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic error dicts into {msg, path, location} items."""
    items = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        items.append(
            {
                "msg": err.get("msg", "Invalid value"),
                "path": loc[-1] if len(loc) > 1 else "",
                "location": loc[0] if loc else "body",
            }
        )
    return items
