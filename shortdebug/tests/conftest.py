"""Shared pytest configuration."""

import logging

import pytest


def pytest_configure(config):
    """Report test ids without their file paths."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The CLI reconfigures the root logger on every invocation."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
