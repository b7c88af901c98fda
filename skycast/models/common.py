"""Common helpers shared across models."""

from datetime import UTC, datetime


def unix_to_iso(timestamp: int | float) -> str:
    """Render a provider unix timestamp as an ISO-8601 UTC string."""
    return datetime.fromtimestamp(timestamp, UTC).isoformat()
