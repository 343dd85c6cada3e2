"""Terminal display adapters."""

import json
import os
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Any, TextIO

from colorama import Fore, Style

from mvg_home.adapters.terminal.departure_formatter import DepartureFormatter
from mvg_home.domain.errors import MvgHomeError
from mvg_home.domain.models.recommendation import Recommendation
from mvg_home.domain.ports.display_adapter import DisplayAdapter

NOTHING_CATCHABLE = "No catchable departures."


def _wants_color(stream: TextIO) -> bool:
    """Color only real terminals, and respect NO_COLOR."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class TerminalDisplayAdapter(DisplayAdapter):
    """Prints one line per recommended departure."""

    def __init__(
        self,
        formatter: DepartureFormatter,
        out: TextIO | None = None,
        err: TextIO | None = None,
        color: bool | None = None,
    ) -> None:
        """Initialize the display.

        Args:
            formatter: Formatter for times and durations.
            out: Stream for recommendations, defaults to stdout.
            err: Stream for errors, defaults to stderr.
            color: Force color on or off; None detects a terminal.
        """
        self._formatter = formatter
        self._out = out or sys.stdout
        self._err = err or sys.stderr
        self._color = _wants_color(self._out) if color is None else color
        self._err_color = _wants_color(self._err) if color is None else color

    def _paint(self, text: str, color: str | None) -> str:
        if not self._color or color is None or not text:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def format_recommendation(self, recommendation: Recommendation) -> str:
        """Render a recommendation as a single line."""
        departure = recommendation.departure
        minutes = self._formatter.minutes_until(recommendation.slack)

        if departure.delay is None:
            delay_color = None
        elif departure.delay:
            delay_color = Fore.RED
        else:
            delay_color = Fore.GREEN
        clock = self._paint(self._formatter.format_clock(departure.display_time), delay_color)
        delay = self._paint(self._formatter.format_delay(departure.delay), delay_color)

        line = (
            f"🏡 In {minutes:>2} min  {clock}{' ' + delay if delay else ''}  "
            f"{self._formatter.icon(departure.transport_type)} {departure.line} "
            f"→ {departure.destination}"
        )
        if departure.platform:
            line += f"  🚏 {departure.platform}"
        if departure.is_cancelled:
            line += "  " + self._paint("cancelled", Fore.RED)
        return line

    def show_recommendations(
        self, recommendations: Sequence[Recommendation], now: datetime
    ) -> None:
        """Print the recommendations, or that nothing can be caught anymore."""
        if not recommendations:
            print(self._paint(NOTHING_CATCHABLE, Fore.YELLOW), file=self._out)
            return
        for recommendation in recommendations:
            print(self.format_recommendation(recommendation), file=self._out)

    def show_error(self, error: MvgHomeError) -> None:
        """Print a fatal error to the error stream."""
        message = f"Error: {error.to_details().reason}"
        if self._err_color:
            message = f"{Fore.RED}{message}{Style.RESET_ALL}"
        print(message, file=self._err)


class JsonDisplayAdapter(DisplayAdapter):
    """Prints recommendations as a JSON array, for scripts and status bars."""

    def __init__(
        self, formatter: DepartureFormatter, out: TextIO | None = None, err: TextIO | None = None
    ) -> None:
        self._formatter = formatter
        self._out = out or sys.stdout
        self._err = err or sys.stderr

    def to_dict(self, recommendation: Recommendation, now: datetime) -> dict[str, Any]:
        departure = recommendation.departure
        return {
            "line": departure.line,
            "destination": departure.destination,
            "transport_type": departure.transport_type,
            "platform": departure.platform,
            "stop_point_id": departure.stop_point_id,
            "scheduled": departure.scheduled.isoformat(),
            "delay_minutes": (
                None if departure.delay is None else departure.delay.total_seconds() / 60
            ),
            "effective": recommendation.effective_time.isoformat(),
            "departs_in": self._formatter.format_compact_duration(
                recommendation.effective_time - now
            ),
            "leave_in_minutes": self._formatter.minutes_until(recommendation.slack),
            "cancelled": departure.is_cancelled,
        }

    def show_recommendations(
        self, recommendations: Sequence[Recommendation], now: datetime
    ) -> None:
        payload = [self.to_dict(r, now) for r in recommendations]
        print(json.dumps(payload, ensure_ascii=False, indent=2), file=self._out)

    def show_error(self, error: MvgHomeError) -> None:
        payload = {"error": error.to_details().model_dump()}
        print(json.dumps(payload, ensure_ascii=False), file=self._err)
