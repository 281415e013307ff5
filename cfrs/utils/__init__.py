"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Job config validation (validators)
    - Atomic I/O (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (canvas, interpreter, export).
The one exception is validators, which parses colour names through
cfrs.canvas.enums (a leaf module with no further imports).

Convenience imports:
    from cfrs.utils import fs, validators
    from cfrs.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
