"""
Core logic package.

Provides path composition, response relaying and error types.
"""

from .paths import compose_path, escape_segment
from .relay import relay_response, relay_stream

__all__ = [
    "compose_path",
    "escape_segment",
    "relay_response",
    "relay_stream",
]
