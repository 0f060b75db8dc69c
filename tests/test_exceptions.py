"""Tests for service_template.exceptions module."""

import pytest

from service_template.exceptions import (
    CommandRegistryError,
    ConfigurationError,
    ServerError,
    ServiceTemplateError,
)


class TestServiceTemplateError:
    """Tests for the base exception class."""

    def test_basic_message(self):
        err = ServiceTemplateError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.context == {}
        assert err.suggestions == []

    def test_with_context(self):
        err = ServiceTemplateError("Bind failed", context={"port": 3000, "host": "0.0.0.0"})
        msg = str(err)
        assert "Bind failed" in msg
        assert "Context:" in msg
        assert "port: 3000" in msg
        assert "host: 0.0.0.0" in msg

    def test_with_suggestions(self):
        err = ServiceTemplateError("Invalid port", suggestions=["Use 3000", "Check $PORT"])
        msg = str(err)
        assert "Suggestions:" in msg
        assert "  - Use 3000" in msg
        assert "  - Check $PORT" in msg

    def test_context_before_suggestions(self):
        err = ServiceTemplateError("Oops", context={"a": 1}, suggestions=["fix it"])
        msg = str(err)
        assert msg.index("Context:") < msg.index("Suggestions:")


class TestSubclasses:
    """Tests for the specific error types."""

    @pytest.mark.parametrize("cls", [ConfigurationError, CommandRegistryError, ServerError])
    def test_is_base_error(self, cls):
        err = cls("problem", context={"k": "v"})
        assert isinstance(err, ServiceTemplateError)
        assert "k: v" in str(err)

    def test_can_be_caught_as_base(self):
        with pytest.raises(ServiceTemplateError):
            raise ConfigurationError("bad")
