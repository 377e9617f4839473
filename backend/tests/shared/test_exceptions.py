"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    ListkeeperError,
    ValidationError,
    NotFoundError,
    ConflictError,
    ConstraintError,
    StateError,
    RateLimitError,
    AuthenticationError,
)


class TestListkeeperError:
    def test_message(self):
        error = ListkeeperError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """Code should default to the class name."""
        assert ListkeeperError("Test error").code == "ListkeeperError"

    def test_custom_code(self):
        assert ListkeeperError("Test error", code="CUSTOM_ERROR").code == "CUSTOM_ERROR"

    def test_default_details(self):
        assert ListkeeperError("Test error").details == {}

    def test_default_status(self):
        assert ListkeeperError("Test error").status_code == 500

    def test_details_are_copied(self):
        details = {"key": "value"}
        error = ListkeeperError("Test error", code="TEST_ERROR", details=details)
        details["key"] = "changed"
        assert error.details == {"key": "value"}

    def test_repr_shows_code(self):
        error = NotFoundError("No such list", code="MAILING_LIST_NOT_FOUND")
        assert repr(error) == "NotFoundError(code='MAILING_LIST_NOT_FOUND', message='No such list')"


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "cls,status",
        [
            (ValidationError, 400),
            (AuthenticationError, 401),
            (NotFoundError, 404),
            (ConflictError, 409),
            (ConstraintError, 409),
            (StateError, 409),
            (RateLimitError, 429),
        ],
    )
    def test_status_codes(self, cls, status):
        error = cls("boom")
        assert isinstance(error, ListkeeperError)
        assert error.status_code == status

    def test_constraint_error_is_a_conflict(self):
        assert issubclass(ConstraintError, ConflictError)

    def test_state_error_is_not_a_conflict(self):
        """Callers can tell a state clash from a uniqueness clash."""
        assert not issubclass(StateError, ConflictError)
