"""Output helpers: write JSON, CSV and Excel exports of trades and summaries."""
import csv
import io
import json
from pathlib import Path
from typing import Any, BinaryIO, Iterable, List, Sequence, Union
import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .schema import PersonSummary, Trade
from .utils import format_us_date

TRADE_HEADERS = ['Person 1', 'Date', 'Hours', 'Person 2']
SUMMARY_HEADERS = ['Name', 'You Worked', 'They Worked', 'Total']


def write_json(obj: Any, out_path: str):
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open('w', encoding='utf-8') as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)


def _num(value: float) -> str:
    # 8.0 -> '8', 7.5 -> '7.5'
    return f'{value:g}'


def trade_rows(trades: Iterable[Trade]) -> List[List[str]]:
    return [[t.person1, format_us_date(t.date), _num(t.hours), t.person2] for t in trades]


def summary_rows(summaries: Iterable[PersonSummary]) -> List[List[str]]:
    return [[s.name, _num(s.you_worked), _num(s.they_worked), _num(s.total)] for s in summaries]


def _to_csv(rows: Sequence[Sequence[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerows(rows)
    return buf.getvalue()


def trades_to_csv(trades: Iterable[Trade]) -> str:
    return _to_csv([TRADE_HEADERS] + trade_rows(trades))


def summary_to_csv(summaries: Iterable[PersonSummary]) -> str:
    return _to_csv([SUMMARY_HEADERS] + summary_rows(summaries))


def combined_to_csv(trades: Iterable[Trade], summaries: Iterable[PersonSummary]) -> str:
    """Trade list and summary in one file, separated by section markers."""
    rows = [['--- TRADE LIST ---'], TRADE_HEADERS]
    rows += trade_rows(trades)
    rows += [[], ['', '--- SUMMARY ---'], SUMMARY_HEADERS]
    rows += summary_rows(summaries)
    return _to_csv(rows)


def _write_sheet(ws, headers: List[str], rows: List[List[Any]]):
    header_font = Font(bold=True)
    header_fill = PatternFill('solid', fgColor='FFDCE6F1')
    thin = Side(border_style='thin', color='FFBBBBBB')
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    ws.append(headers)
    for col in range(1, len(headers) + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal='center', vertical='center')
        cell.border = border

    for row in rows:
        ws.append(row)

    # widen columns to the longest value
    for col in range(1, len(headers) + 1):
        letter = get_column_letter(col)
        width = max(len(str(c.value)) if c.value is not None else 0 for c in ws[letter])
        ws.column_dimensions[letter].width = max(10, width + 2)
    ws.freeze_panes = 'A2'


def write_excel(trades: Iterable[Trade], summaries: Iterable[PersonSummary], out: Union[str, Path, BinaryIO]):
    """Create a workbook with sheets `trades` and `summary`.

    - `trades`: Person 1 | Date | Hours | Person 2 (hours stay numeric)
    - `summary`: Name | You Worked | They Worked | Total

    `out` is a path or a writable binary file object.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'trades'
    _write_sheet(ws, TRADE_HEADERS, [[t.person1, t.date, t.hours, t.person2] for t in trades])

    ws2 = wb.create_sheet('summary')
    _write_sheet(
        ws2,
        SUMMARY_HEADERS,
        [[s.name, s.you_worked, s.they_worked, s.total] for s in summaries],
    )

    if isinstance(out, (str, Path)):
        Path(out).parent.mkdir(parents=True, exist_ok=True)
        wb.save(str(out))
    else:
        wb.save(out)
