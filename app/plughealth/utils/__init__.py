"""Utility modules for plughealth.

This module exports commonly used utility functions.
"""

from plughealth.utils.clock import Clock, now_ms
from plughealth.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "Clock",
    "console",
    "err_console",
    "now_ms",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
