import logging

import pytest

from app.bootstrap import tracing

OTEL_KEYS = (
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_HEADERS",
    "LANGFUSE_PUBLIC_KEY",
    "LANGFUSE_SECRET_KEY",
    "LANGFUSE_BASE_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in OTEL_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.mark.unit
class TestValidateOtelEnvVars:
    """OpenTelemetry/Langfuse environment validation."""

    def test_raises_when_endpoint_not_set(self):
        with pytest.raises(RuntimeError) as exc_info:
            tracing.validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_ENDPOINT" in str(exc_info.value)
        assert "not set or is empty" in str(exc_info.value)

    def test_raises_when_endpoint_is_blank(self, monkeypatch):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "   ")

        with pytest.raises(RuntimeError) as exc_info:
            tracing.validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_ENDPOINT" in str(exc_info.value)

    def test_raises_when_headers_not_set(self, monkeypatch):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "https://example.com/otlp")

        with pytest.raises(RuntimeError) as exc_info:
            tracing.validate_otel_env_vars()

        assert "OTEL_EXPORTER_OTLP_HEADERS" in str(exc_info.value)

    def test_succeeds_with_direct_headers(self, monkeypatch):
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "https://example.com/otlp")
        monkeypatch.setenv("OTEL_EXPORTER_OTLP_HEADERS", "Authorization=Basic dGVzdA==")

        tracing.validate_otel_env_vars()

    def test_succeeds_with_langfuse_keys_only(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-test")
        monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-test")
        monkeypatch.setenv("LANGFUSE_BASE_URL", "https://langfuse.example.com")

        tracing.validate_otel_env_vars()


@pytest.mark.unit
class TestConfigureTracing:
    def test_disabled_does_nothing(self):
        assert tracing.configure_tracing(False, logging.getLogger("TracingTest")) is False

    def test_skipped_under_tests_even_when_enabled(self):
        # Would raise on the missing OTEL variables if validation ran
        assert tracing.configure_tracing(True, logging.getLogger("TracingTest")) is False

    def test_detects_testing_env_var(self, monkeypatch):
        monkeypatch.setattr(tracing.sys, "argv", ["main.py"])
        monkeypatch.setenv("TESTING", "1")

        assert tracing.is_test_environment() is True

    def test_detects_regular_run(self, monkeypatch):
        monkeypatch.setattr(tracing.sys, "argv", ["main.py"])
        monkeypatch.setenv("TESTING", "")

        assert tracing.is_test_environment() is False
