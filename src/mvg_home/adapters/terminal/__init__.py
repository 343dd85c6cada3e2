"""Terminal presentation adapters."""

from mvg_home.adapters.terminal.departure_formatter import DepartureFormatter
from mvg_home.adapters.terminal.terminal_display import (
    NOTHING_CATCHABLE,
    JsonDisplayAdapter,
    TerminalDisplayAdapter,
)

__all__ = [
    "NOTHING_CATCHABLE",
    "DepartureFormatter",
    "JsonDisplayAdapter",
    "TerminalDisplayAdapter",
]
