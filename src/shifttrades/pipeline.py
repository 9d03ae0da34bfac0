"""Entry points that turn one upload into a `ParseResult`.

Each call is a self-contained batch: either every accepted trade is returned
or the whole batch fails with a user-facing message.
"""
from typing import Any, Callable, Dict, List, Sequence
import logging

from .errors import TradeParseError
from .loader import read_workbook_grid
from .parsers import parse_grid, parse_pasted_text, parse_records
from .schema import ParseResult, Trade
from .settings import get_settings

logger = logging.getLogger(__name__)

INTERNAL_ERROR = 'InternalError'


def _run(source: str, build: Callable[[], List[Trade]]) -> ParseResult:
    try:
        trades = build()
    except TradeParseError as e:
        logger.warning("%s rejected: %s", source, e.message)
        return ParseResult.failure(e.message, type(e).__name__)
    except Exception as e:
        logger.error("unexpected error processing %s: %s", source, e, exc_info=True)
        return ParseResult.failure(str(e) or "Failed to process data", INTERNAL_ERROR)
    result = ParseResult.ok(trades)
    logger.info("%s: %s", source, result.message)
    return result


def load_workbook(content: bytes, filename: str, mode=None) -> ParseResult:
    """Parse an uploaded .xlsx/.xls/.csv file. `mode` defaults to the configured workbook mode."""
    mode = mode or get_settings().workbook_mode
    return _run(filename or 'workbook', lambda: parse_grid(read_workbook_grid(content, filename), mode))


def load_pasted_text(text: str, mode=None) -> ParseResult:
    """Parse pasted tab/comma-delimited text. `mode` defaults to the configured paste mode."""
    mode = mode or get_settings().paste_mode
    return _run('pasted text', lambda: parse_pasted_text(text, mode))


def load_records(records: Sequence[Dict[str, Any]]) -> ParseResult:
    return _run('records', lambda: parse_records(records))
