"""
Pytest configuration and fixtures for the test suite.

This file is automatically loaded by pytest before running tests.
It disables Langfuse tracing so backend calls decorated with ``observe`` never
try to export traces during test runs.
"""

import os
import logging

# This must be set BEFORE langfuse is imported
os.environ["LANGFUSE_TRACING_ENABLED"] = "false"
os.environ["TESTING"] = "true"

_langfuse_logger = logging.getLogger("langfuse")
_langfuse_logger.setLevel(logging.CRITICAL)
_langfuse_logger.propagate = False
