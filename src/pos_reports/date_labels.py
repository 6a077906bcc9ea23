"""English date formatting utilities for report labels.

Labels are built from explicit name tables instead of ``strftime`` so the
output does not depend on the process locale.
"""

from datetime import date

# English day name abbreviations (Monday through Sunday)
DAY_ABBREVIATIONS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# English month names (January through December)
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]

# English month name abbreviations (January through December)
MONTH_ABBREVIATIONS = [m[:3] for m in MONTHS]


def format_day_abbrev(d: date) -> str:
    """Format a date as its weekday abbreviation, e.g. 'Mon'."""
    return DAY_ABBREVIATIONS[d.weekday()]


def format_month_day(d: date) -> str:
    """Format date like 'Oct 05'.

    Args:
        d: Date object to format

    Returns:
        Abbreviated month and zero-padded day (e.g., "Oct 05")
    """
    return f"{MONTH_ABBREVIATIONS[d.month - 1]} {d.day:02d}"


def format_month_day_year(d: date) -> str:
    """Format date like 'Oct 05, 2026'."""
    return f"{format_month_day(d)}, {d.year}"


def format_month_abbrev(d: date) -> str:
    return MONTH_ABBREVIATIONS[d.month - 1]


def format_month_year(d: date) -> str:
    """Format date like 'October 2026'."""
    return f"{MONTHS[d.month - 1]} {d.year}"
