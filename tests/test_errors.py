"""Tests for mapping database errors to constraint violations."""

from sqlalchemy.exc import IntegrityError

from kiosk.core.errors import ConstraintViolation, constraint_name, from_integrity_error


class _PgUniqueViolation(Exception):
    constraint_name = "uq_products_user_bar_code"


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


def test_sqlite_unique_message_mapped_to_name():
    exc = _integrity_error(Exception("UNIQUE constraint failed: products.user_id, products.bar_code"))
    assert constraint_name(exc) == "uq_products_user_bar_code"


def test_sqlite_check_message_keeps_constraint_name():
    exc = _integrity_error(Exception("CHECK constraint failed: ck_sales_payment_method"))
    assert constraint_name(exc) == "ck_sales_payment_method"


def test_driver_constraint_name_preferred():
    orig = Exception("duplicate key value violates unique constraint")
    orig.__cause__ = _PgUniqueViolation()
    assert constraint_name(_integrity_error(orig)) == "uq_products_user_bar_code"


def test_unknown_error_has_no_name():
    exc = from_integrity_error(_integrity_error(Exception("something else")))
    assert isinstance(exc, ConstraintViolation)
    assert exc.constraint is None
    assert exc.status_code == 409
