"""Stackenv - CloudFormation outputs to JSON and TypeScript env typings.

The ``stackenv`` logger stays silent unless the application configures
logging; the CLI does so in ``stackenv.cli.app``.
"""

import logging

from .cli import main

__version__ = "0.1.0"
__all__ = ["__version__", "main"]

logging.getLogger(__name__).addHandler(logging.NullHandler())
