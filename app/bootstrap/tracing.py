import logging
import os
import sys


def is_test_environment() -> bool:
    """
    Check if we are running in a test environment.

    Returns:
        True if running under pytest or if TESTING env var is set, False otherwise.
    """
    if any("pytest" in arg for arg in sys.argv):
        return True

    return os.getenv("TESTING", "").lower() in ("true", "1", "yes")


def validate_otel_env_vars() -> None:
    """
    Validate the environment needed to export traces.

    Langfuse native credentials (``LANGFUSE_PUBLIC_KEY``, ``LANGFUSE_SECRET_KEY``
    and ``LANGFUSE_BASE_URL``) are enough on their own. Otherwise both
    ``OTEL_EXPORTER_OTLP_ENDPOINT`` and ``OTEL_EXPORTER_OTLP_HEADERS`` must be set.

    Raises:
        RuntimeError: If neither configuration is complete.
    """
    langfuse_keys = (
        os.getenv("LANGFUSE_PUBLIC_KEY", "").strip(),
        os.getenv("LANGFUSE_SECRET_KEY", "").strip(),
        os.getenv("LANGFUSE_BASE_URL", "").strip(),
    )
    if all(langfuse_keys):
        return

    if not os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip():
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_ENDPOINT is not set or is empty. "
            "Set it, or provide LANGFUSE_PUBLIC_KEY, LANGFUSE_SECRET_KEY and "
            "LANGFUSE_BASE_URL."
        )

    if not os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "").strip():
        raise RuntimeError(
            "OTEL_EXPORTER_OTLP_HEADERS is not set or is empty. "
            "Set it (e.g. 'Authorization=Basic <credentials>'), or provide the "
            "Langfuse keys."
        )


def configure_tracing(enabled: bool, logger: logging.Logger) -> bool:
    """Instrument Google GenAI calls. Returns whether instrumentation ran."""
    if not enabled or is_test_environment():
        logger.debug("Tracing disabled")
        return False

    validate_otel_env_vars()

    from openinference.instrumentation.google_genai import GoogleGenAIInstrumentor

    GoogleGenAIInstrumentor().instrument()
    logger.info("Google GenAI instrumentation enabled")
    return True
