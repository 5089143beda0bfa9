"""Registry error hierarchy.

Every failure an engine operation can report is one of three kinds:

  ValidationError    a required input is missing or empty
  NotFoundError      a referenced entity is absent, or a listing/search
                     came back empty (empty results are reported as
                     not-found, the registry's established contract)
  InvalidStateError  the credential's lifecycle state forbids the call
                     (already revoked, expired)

Each carries a short ``kind`` code plus a ``context`` dict so the HTTP
layer (and the logs) can report structured failures.  Raising one never
leaves a store half-written: engines check every precondition before
the single write.
"""

from __future__ import annotations

from typing import Any


class RegistryError(Exception):
    """Base class for errors raised by the registry engines."""

    kind: str = "RegistryError"

    def __init__(self, message: str, *, kind: str | None = None, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.context: dict[str, Any] = context

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message, "kind": self.kind}
        if self.context:
            body["context"] = self.context
        return body


class ValidationError(RegistryError):
    kind = "MissingField"

    @classmethod
    def missing(cls, field: str) -> ValidationError:
        return cls(f"'{field}' must be provided and non-empty", field=field)


class NotFoundError(RegistryError):
    kind = "NotFound"

    def __init__(self, entity: str, entity_id: str | None = None) -> None:
        if entity_id is None:
            message = f"No {entity} found"
        else:
            message = f"{entity} not found"
        super().__init__(message, entity=entity)
        self.entity = entity
        self.entity_id = entity_id


class InvalidStateError(RegistryError):
    kind = "InvalidState"


ALREADY_REVOKED = "AlreadyRevoked"
EXPIRED = "Expired"
MISSING_REASON = "MissingReason"


def require_text(field: str, value: str | None) -> str:
    """Return ``value`` as given, or raise ValidationError if it is blank."""
    if value is None or not value.strip():
        raise ValidationError.missing(field)
    return value
