"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime

from common.datetime import parse_datetime, to_utc


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_iso_datetime(value: str, field_name: str = "datetime") -> datetime:
    """Parse an ISO-8601 datetime for argparse arguments.

    Args:
        value: Datetime string, e.g. 2024-01-01T12:00:00Z.
        field_name: Name of the field for error messages.

    Returns:
        Parsed UTC datetime.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid datetime.
    """
    try:
        return to_utc(parse_datetime(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{field_name} must be an ISO-8601 datetime") from exc


def parse_csv_list(value: str | None) -> list[str]:
    """Split a comma-separated CLI value into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
