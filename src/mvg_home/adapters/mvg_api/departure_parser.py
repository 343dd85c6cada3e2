"""Parser for MVG departure monitor responses (bgw-pt v3 format)."""

import logging
import math
from datetime import UTC, datetime, timedelta
from typing import Any

from mvg_home.domain.errors import DecodeError
from mvg_home.domain.models.departure import Departure

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("plannedDepartureTime", "label", "destination")
# Delays beyond a day are treated as garbage
MAX_DELAY_MINUTES = 24 * 60

# Display names for MVG transport types
TRANSPORT_TYPE_NAMES = {
    "UBAHN": "U-Bahn",
    "SBAHN": "S-Bahn",
    "BUS": "Bus",
    "REGIONAL_BUS": "Regionalbus",
    "TRAM": "Tram",
    "BAHN": "Bahn",
    "SCHIFF": "Schiff",
    "RUFTAXI": "Ruftaxi",
}


class MvgDepartureParser:
    """Parses MVG departure responses into Departure objects.

    Unknown fields are ignored so additions to the upstream API do not break
    parsing. Missing required fields are a DecodeError.
    """

    @staticmethod
    def parse_departures(data: Any) -> list[Departure]:
        """Parse the JSON body of a departures response.

        Args:
            data: Decoded JSON body, expected to be a list of departure records.

        Returns:
            Departures in response order.

        Raises:
            DecodeError: If the body or a record does not match the expected shape.
        """
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of departures, got {type(data).__name__}")
        return [
            MvgDepartureParser.parse_departure(record, index) for index, record in enumerate(data)
        ]

    @staticmethod
    def parse_departure(record: Any, index: int = 0) -> Departure:
        """Parse a single departure record."""
        if not isinstance(record, dict):
            raise DecodeError(f"Departure #{index} is not an object")

        missing = [name for name in REQUIRED_FIELDS if record.get(name) is None]
        if missing:
            raise DecodeError(f"Departure #{index} is missing {', '.join(missing)}")

        transport_type = str(record.get("transportType") or "")
        return Departure(
            line=str(record["label"]),
            destination=str(record["destination"]),
            scheduled=MvgDepartureParser._parse_timestamp(record["plannedDepartureTime"], index),
            delay=MvgDepartureParser._parse_delay(record.get("delayInMinutes"), index),
            platform=MvgDepartureParser._parse_platform(record.get("platform")),
            stop_point_id=record.get("stopPointGlobalId") or None,
            transport_type=TRANSPORT_TYPE_NAMES.get(transport_type, transport_type),
            is_cancelled=record.get("cancelled") is True,
        )

    @staticmethod
    def _parse_timestamp(value: Any, index: int) -> datetime:
        """Parse epoch milliseconds into an aware UTC datetime."""
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise DecodeError(f"Departure #{index} has invalid departure time {value!r}")
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            raise DecodeError(f"Departure #{index} has invalid departure time {value!r}") from e

    @staticmethod
    def _parse_delay(value: Any, index: int) -> timedelta | None:
        """Parse delay in minutes; absent means unknown."""
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise DecodeError(f"Departure #{index} has invalid delay {value!r}")
        if abs(value) > MAX_DELAY_MINUTES or not math.isfinite(value):
            raise DecodeError(f"Departure #{index} has implausible delay {value!r}")
        return timedelta(minutes=value)

    @staticmethod
    def _parse_platform(value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)
