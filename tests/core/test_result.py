"""Tests for translate_spine.core.result module."""

from translate_spine.core.errors import NoProvidersConfiguredError
from translate_spine.core.result import Err, Ok, Result


class TestOk:
    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True

    def test_unwrap_or_returns_value(self):
        assert Ok(10).unwrap_or(99) == 10

    def test_equality(self):
        assert Ok(None) == Ok(None)
        assert Ok("a") != Ok("b")


class TestErr:
    def test_create_err(self):
        error = NoProvidersConfiguredError()
        result = Err(error)
        assert result.error is error
        assert result.is_ok() is False

    def test_unwrap_or(self):
        assert Err(ValueError("x")).unwrap_or("default") == "default"
        assert Err(ValueError("x")).unwrap_or(None) is None


class TestPatternMatching:
    def test_match(self):
        def describe(result: Result[str]) -> str:
            match result:
                case Ok(value):
                    return f"ok:{value}"
                case Err(error):
                    return f"err:{error}"

        assert describe(Ok("a")) == "ok:a"
        assert describe(Err(ValueError("b"))) == "err:b"
