"""Tests for mizan.core.exceptions."""

from mizan.core.exceptions import (
    ConfigurationError,
    InvalidPriceQuoteError,
    MizanError,
    UnknownSchoolError,
)


def test_hierarchy():
    """All exceptions should inherit from MizanError."""
    for exc_cls in [ConfigurationError, UnknownSchoolError, InvalidPriceQuoteError]:
        assert issubclass(exc_cls, MizanError)


def test_unknown_school_is_configuration_error():
    assert issubclass(UnknownSchoolError, ConfigurationError)
    assert issubclass(UnknownSchoolError, ValueError)


def test_invalid_quote_is_value_error():
    assert issubclass(InvalidPriceQuoteError, ValueError)


def test_exception_message():
    err = ConfigurationError("missing key: obligations.school")
    assert "missing key" in str(err)


def test_catch_base():
    """Catching MizanError should catch all subtypes."""
    try:
        raise UnknownSchoolError("Unknown school: 'zahiri'")
    except MizanError as e:
        assert "zahiri" in str(e)
