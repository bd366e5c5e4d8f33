from __future__ import annotations

import logging

import stackenv
from stackenv.cli.app import main


def test_exports_version_and_entry_point():
    assert stackenv.__version__ == "0.1.0"
    assert stackenv.main is main
    assert set(stackenv.__all__) == {"__version__", "main"}


def test_library_logger_has_null_handler():
    handlers = logging.getLogger("stackenv").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
