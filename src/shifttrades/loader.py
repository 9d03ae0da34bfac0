"""Decode an uploaded workbook or CSV file into a raw cell grid.

Cells keep the types pandas gives them (str, int/float, datetime, time);
empty cells become ''.
"""
from pathlib import Path
from typing import Any, List
import io
import logging

import pandas as pd

from .errors import EmptyInput, NoSheetFound, UnsupportedFileType, WorkbookReadError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = ('.xlsx', '.xls')
CSV_SUFFIXES = ('.csv',)
ALLOWED_SUFFIXES = EXCEL_SUFFIXES + CSV_SUFFIXES


def file_suffix(filename: str) -> str:
    return Path(filename).suffix.lower() if filename else ''


def _frame_to_grid(df: pd.DataFrame) -> List[List[Any]]:
    df = df.astype(object).where(pd.notna(df), '')
    return df.values.tolist()


def read_workbook_grid(content: bytes, filename: str) -> List[List[Any]]:
    """Read the first sheet of an .xlsx/.xls file (or a .csv file) without treating any row as header."""
    suffix = file_suffix(filename)
    if suffix not in ALLOWED_SUFFIXES:
        raise UnsupportedFileType()
    if not content:
        raise EmptyInput("No file uploaded")

    buf = io.BytesIO(content)
    try:
        if suffix in CSV_SUFFIXES:
            df = pd.read_csv(buf, header=None, dtype=object, keep_default_na=False, skip_blank_lines=False)
        else:
            with pd.ExcelFile(buf) as xls:
                if not xls.sheet_names:
                    raise NoSheetFound()
                sheet = xls.sheet_names[0]
                df = xls.parse(sheet, header=None, dtype=object)
            logger.debug("read sheet %r from %s", sheet, filename)
    except NoSheetFound:
        raise
    except pd.errors.EmptyDataError:
        raise EmptyInput("No data found in file")
    except ImportError as e:
        # legacy .xls needs the optional xlrd engine
        raise WorkbookReadError(f"Cannot read {suffix} files: {e}")
    except Exception as e:
        raise WorkbookReadError(f"Cannot read {filename}: {e}")

    grid = _frame_to_grid(df)
    if not grid:
        raise EmptyInput("No data found in file")
    logger.info("decoded %s: %d rows x %d columns", filename, len(grid), df.shape[1])
    return grid
