"""Notification sinks for short user-visible messages."""

from typing import Protocol

from plughealth.utils.formatting import print_error, print_info, print_success


class Notifier(Protocol):
    """Fire-and-forget sink for user-visible notices."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Prints notices through the shared Rich consoles.

    Args:
        quiet: Suppress info and success notices. Errors are always shown.
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._quiet = quiet

    def info(self, message: str) -> None:
        if not self._quiet:
            print_info(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            print_success(message)

    def error(self, message: str) -> None:
        print_error(message)
