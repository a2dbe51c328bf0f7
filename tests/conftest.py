"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attached to the 'textile2md' logger.

    CliRunner swaps sys.stderr per invocation, so a handler left over from
    one test would write to a closed stream in the next.
    """
    yield
    app_logger = logging.getLogger("textile2md")
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
