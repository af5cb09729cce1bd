# core/accounts.py
"""
Account lifecycle rules shared by the HTTP handlers.

Updates are merge-by-presence: only the keys present in the incoming payload
are written; absent keys keep their stored value. Supplying any profile field
marks the profile as completed, and nothing ever flips it back.
"""
from __future__ import annotations

from typing import Any, Callable

# Columns of services.db.Account that count as "profile" data
PROFILE_FIELDS: frozenset[str] = frozenset(
    {
        "first_name",
        "last_name",
        "age",
        "height",
        "weight",
        "exercise_choice",
        "city",
        "state",
        "zip_code",
        "phone_number",
        "profile_picture",
    }
)

# Everything a client may change through an update
UPDATABLE_FIELDS: frozenset[str] = PROFILE_FIELDS | {"username", "email", "password"}


def build_changes(
    present: dict[str, Any],
    hasher: Callable[[str], str],
) -> dict[str, Any]:
    """
    Turn the present keys of an update payload into column assignments.

    `present` must only hold keys the client actually sent (explicit None
    included). A password is replaced by its hash; unknown keys are dropped.
    """
    changes = {k: v for k, v in present.items() if k in UPDATABLE_FIELDS}
    if changes.get("password") is not None:
        changes["password"] = hasher(changes["password"])
    if PROFILE_FIELDS.intersection(changes):
        changes["profile_completed"] = True
    return changes


def apply_changes(record: Any, changes: dict[str, Any]) -> Any:
    """Write `changes` onto `record` in place and return it."""
    for field, value in changes.items():
        setattr(record, field, value)
    return record
