import io
from datetime import datetime, time

import openpyxl
import pytest


def positional_row(person1, date, start, end, person2):
    """Cells laid out like the trade sheet: E=person 1, F=date, G=start, H=end, K=person 2."""
    return ['', '', '', '', person1, date, start, end, '', '', person2]


def make_xlsx(rows, title='Trades') -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def trade_sheet_bytes():
    """Workbook in the positional layout with a header row, as exported by the scheduling system."""
    header = ['Week', 'Unit', 'Posted', 'Status', 'Person 1', 'Trade Date', 'Trade Start Time',
              'Trade End Time', 'Notes', 'Approved', 'Person 2']
    rows = [
        header,
        [1, 'ICU', datetime(2023, 12, 28), 'ok', 'alice', datetime(2024, 1, 2), time(9, 0), time(17, 0), None, 'Y', 'bob'],
        [1, 'ICU', datetime(2023, 12, 29), 'ok', 'Bob ', '1/3/2024', '10:00 PM', '2:00 AM', None, 'Y', 'Alice'],
        [2, 'ER', datetime(2023, 12, 30), 'ok', 'carol', datetime(2024, 1, 9), time(8, 0), time(8, 0), None, 'N', 'dave'],
    ]
    return make_xlsx(rows)
