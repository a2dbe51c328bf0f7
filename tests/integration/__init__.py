"""Integration tests running the real pandoc executable.

These tests are skipped when pandoc is not on PATH. Run them alone with:
    pytest tests/integration -m integration
"""
