"""Output formatting utilities for feedcomposer."""

from datetime import datetime, timezone


def format_number(value: int | float) -> str:
    """
    Format large numbers with K/M suffixes.

    Args:
        value: The number to format.

    Returns:
        Formatted string (e.g., "1.5K", "2.3M").
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(int(value))


def truncate_text(text: str | None, max_length: int = 50, suffix: str = "...") -> str:
    """Truncate text to ``max_length`` characters, suffix included."""
    if not text:
        return ""

    # Feed content is multi-line; table cells are not
    text = " ".join(text.split())
    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix


def format_file_size(size_bytes: int | float) -> str:
    """
    Format a file size in bytes as a human-readable string.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., "2.5 MB").
    """
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def format_relative_time(moment: datetime, now: datetime | None = None) -> str:
    """
    Format a datetime as relative time (e.g., "2 days ago").

    Naive datetimes are treated as UTC. Anything older than a month is shown
    as a plain date.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now is None:
        now = datetime.now(timezone.utc)

    seconds = (now - moment).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    if seconds < 604800:
        days = int(seconds / 86400)
        return f"{days} day{'s' if days != 1 else ''} ago"
    if seconds < 2592000:
        weeks = int(seconds / 604800)
        return f"{weeks} week{'s' if weeks != 1 else ''} ago"

    return moment.strftime("%Y-%m-%d")
