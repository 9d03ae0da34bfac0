"""shifttrades package"""

from .schema import Trade, PersonSummary, ParseResult
from .columns import ColumnMode
from .parsers import parse_grid, parse_records, parse_pasted_text
from .pipeline import load_workbook, load_pasted_text, load_records
from .summary import summarize, sort_summary, select_summary, filter_trades
from .utils import normalize_name, normalize_date, parse_time_fraction, elapsed_hours

__all__ = [
    "Trade", "PersonSummary", "ParseResult", "ColumnMode",
    "parse_grid", "parse_records", "parse_pasted_text",
    "load_workbook", "load_pasted_text", "load_records",
    "summarize", "sort_summary", "select_summary", "filter_trades",
    "normalize_name", "normalize_date", "parse_time_fraction", "elapsed_hours",
]
