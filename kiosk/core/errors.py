"""Domain errors raised by the authorization engine and services.

Routes let these propagate; ``kiosk.main`` turns them into JSON responses.
"""

import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class KioskError(Exception):
    status_code: int = 400
    code: str = "error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.__class__.__doc__ or self.code
        super().__init__(self.detail)


class RowNotFound(KioskError):
    """Row not found."""

    status_code = 404
    code = "not_found"


class OperationDenied(KioskError):
    """Operation not allowed on this row."""

    status_code = 403
    code = "forbidden"


class SubscriptionInactive(KioskError):
    """An active or trial subscription is required to register sales."""

    status_code = 402
    code = "subscription_inactive"


class ConstraintViolation(KioskError):
    """A data constraint was violated."""

    status_code = 409
    code = "constraint_violation"

    def __init__(self, constraint: str | None, detail: str | None = None):
        self.constraint = constraint
        super().__init__(detail or f"Constraint violated: {constraint or 'unknown'}")


class ProvisioningError(KioskError):
    """User provisioning failed, no account was created."""

    status_code = 500
    code = "provisioning_failed"


# SQLite does not report the name of a violated UNIQUE constraint, only the columns.
_UNIQUE_COLUMN_MARKERS = {
    "products.user_id, products.bar_code": "uq_products_user_bar_code",
    "subscriptions.user_id": "uq_subscriptions_user_id",
    "users.email": "uq_users_email",
    "profiles.id": "pk_profiles",
}


def constraint_name(exc: IntegrityError) -> str | None:
    """Best-effort name of the constraint behind an IntegrityError."""
    cause = getattr(exc.orig, "__cause__", None)
    name = getattr(cause, "constraint_name", None) or getattr(exc.orig, "constraint_name", None)
    if name:
        return name

    message = str(exc.orig)
    for marker, constraint in _UNIQUE_COLUMN_MARKERS.items():
        if marker in message:
            return constraint
    if "CHECK constraint failed:" in message:
        return message.split("CHECK constraint failed:", 1)[1].strip() or None
    if "FOREIGN KEY constraint failed" in message:
        return "foreign_key"
    return None


def from_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    name = constraint_name(exc)
    logger.info("Integrity error mapped to constraint %s", name)
    return ConstraintViolation(name)
