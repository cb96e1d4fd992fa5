"""Unit tests for healthz.schema.errors."""
from __future__ import annotations

import pytest

from healthz.schema.errors import (
    CheckRegistrationError,
    ConfigurationError,
    ErrorSeverity,
    HealthzError,
    IdentityError,
    ReentrantCheckError,
)


class TestErrorSeverity:
    def test_all_members_are_strings(self) -> None:
        for member in ErrorSeverity:
            assert isinstance(member.value, str)

    def test_critical_value(self) -> None:
        assert ErrorSeverity.CRITICAL.value == "critical"


class TestHealthzError:
    def test_default_severity_is_high(self) -> None:
        assert HealthzError("x").severity is ErrorSeverity.HIGH

    def test_context_defaults_to_empty_dict(self) -> None:
        assert HealthzError("x").context == {}

    def test_context_is_stored(self) -> None:
        err = HealthzError("x", context={"path": "/tmp/id"})
        assert err.context["path"] == "/tmp/id"

    def test_message(self) -> None:
        assert str(HealthzError("broken")) == "broken"

    def test_repr(self) -> None:
        text = repr(IdentityError("nope", ErrorSeverity.CRITICAL))
        assert text.startswith("IdentityError(")
        assert "'critical'" in text


@pytest.mark.parametrize(
    "error_cls", [ConfigurationError, IdentityError, CheckRegistrationError, ReentrantCheckError]
)
def test_subclasses_are_caught_by_root(error_cls: type[HealthzError]) -> None:
    with pytest.raises(HealthzError):
        raise error_cls("failure")


def test_chaining_preserves_cause() -> None:
    try:
        try:
            raise OSError("disk")
        except OSError as exc:
            raise IdentityError("wrapped") from exc
    except IdentityError as err:
        assert isinstance(err.__cause__, OSError)
