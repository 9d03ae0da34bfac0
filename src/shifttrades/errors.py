"""Exceptions raised while turning uploaded rows into trades.

Every batch-level failure derives from `TradeParseError`; its `message` is
user-facing and ends up in the `{success: false, message}` response.
"""
from typing import List, Optional


class TradeParseError(Exception):
    """Base class for failures that reject a whole batch."""

    default_message = "Failed to process trade data"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyInput(TradeParseError):
    default_message = "No data found"


class NoSheetFound(TradeParseError):
    default_message = "Excel file is empty"


class UnsupportedFileType(TradeParseError):
    default_message = "Only Excel files (.xlsx, .xls) or CSV files are allowed"


class WorkbookReadError(TradeParseError):
    default_message = "Cannot read the uploaded file"


class MissingRequiredColumns(TradeParseError):
    """Header mode could not locate Person 1, Person 2 or Date."""

    def __init__(self, missing: List[str], message: Optional[str] = None):
        self.missing = list(missing)
        if message is None:
            message = (
                f"Missing required columns: {', '.join(self.missing)}. "
                "Expected headers such as: Person 1, Trade Date, Trade Start Time, "
                "Trade End Time, Person 2 (or Hours)"
            )
        super().__init__(message)


class NoValidRows(TradeParseError):
    default_message = (
        "No valid trade data found. Please ensure your data has columns: "
        "Person 1, Date, Start Time, End Time (or Hours), Person 2"
    )


class InvalidTime(ValueError):
    """A single time cell could not be read; recovered as zero duration."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid time value: {value!r}")
