"""FastAPI app: upload or paste shift trades, reconcile them, export the results."""
from fastapi import FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
import io
import logging
import uuid

from .columns import ColumnMode
from .output import combined_to_csv, summary_to_csv, trades_to_csv, write_excel
from .pipeline import INTERNAL_ERROR, load_pasted_text, load_workbook
from .schema import ParseResult, PersonSummary, Trade
from .settings import get_settings, setup_logging
from .summary import filter_trades, select_summary, sort_summary, summarize

setup_logging()
logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

app = FastAPI(title='Shift Trades API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PasteRequest(BaseModel):
    text: str = ''
    mode: Optional[str] = None


class TradeIn(BaseModel):
    id: Optional[str] = None
    person1: str
    date: str
    hours: float = Field(gt=0, le=24)
    person2: str

    def to_trade(self) -> Trade:
        return Trade(
            id=self.id or str(uuid.uuid4()),
            person1=self.person1.strip().upper(),
            date=self.date,
            hours=self.hours,
            person2=self.person2.strip().upper(),
        )


class SummaryRequest(BaseModel):
    trades: List[TradeIn] = Field(default_factory=list)
    name: Optional[str] = None
    names: Optional[List[str]] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    query: Optional[str] = None

    def selected_trades(self) -> List[Trade]:
        return filter_trades(
            [t.to_trade() for t in self.trades],
            name=self.name,
            start_date=self.start_date,
            end_date=self.end_date,
            query=self.query,
        )

    def selected_summary(self) -> List[PersonSummary]:
        """Balances over every trade, narrowed to the selected name or names."""
        rows = sort_summary(summarize(t.to_trade() for t in self.trades))
        names = self.names if self.names else [self.name] if self.name else None
        return select_summary(rows, names)


class ExportRequest(SummaryRequest):
    kind: Literal['trades', 'summary', 'all'] = 'all'
    format: Literal['csv', 'xlsx'] = 'csv'
    filename: str = 'shift-trades-export'


def _result_response(result: ParseResult) -> JSONResponse:
    if result.success:
        status = 200
    elif result.error_type == INTERNAL_ERROR:
        status = 500
    else:
        status = 400
    return JSONResponse(status_code=status, content=result.to_dict())


def _failure(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={'success': False, 'message': message})


@app.get('/api/health')
def health():
    return {'status': 'ok'}


@app.post('/api/upload')
def upload(file: UploadFile = File(None), mode: Optional[str] = Form(None)):
    """Parse an uploaded workbook (.xlsx/.xls) or CSV file into trades.

    `mode` is 'positional' (columns E,F,G,H,K) or 'header' (match header names);
    it defaults to the configured workbook mode.
    """
    if file is None or not file.filename:
        return _failure(400, 'No file uploaded')
    try:
        column_mode = ColumnMode.parse(mode) if mode else None
    except ValueError as e:
        return _failure(400, str(e))

    limit = get_settings().max_upload_bytes
    content = file.file.read(limit + 1)
    if len(content) > limit:
        logger.warning("rejected upload %s: larger than %d bytes", file.filename, limit)
        return _failure(413, f'File too large; the limit is {limit // (1024 * 1024)}MB')

    return _result_response(load_workbook(content, file.filename, column_mode))


@app.post('/api/parse-paste')
def parse_paste(payload: PasteRequest):
    """Parse pasted tab- or comma-delimited rows into trades."""
    try:
        column_mode = ColumnMode.parse(payload.mode) if payload.mode else None
    except ValueError as e:
        return _failure(400, str(e))
    return _result_response(load_pasted_text(payload.text, column_mode))


@app.post('/api/summary')
def summary(payload: SummaryRequest):
    """Per-person balances, largest first. `name`/`names` pick rows; the other filters only narrow trade_count."""
    trades = payload.selected_trades()
    rows = payload.selected_summary()
    return {'success': True, 'trade_count': len(trades), 'summary': [s.to_dict() for s in rows]}


@app.post('/api/export')
def export(payload: ExportRequest):
    """Download trades and/or summary as CSV, or both as an .xlsx workbook."""
    trades = payload.selected_trades()
    summaries = payload.selected_summary()
    name = payload.filename or 'shift-trades-export'

    if payload.format == 'xlsx':
        buf = io.BytesIO()
        write_excel(trades, summaries, buf)
        return Response(
            content=buf.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            headers={'Content-Disposition': f'attachment; filename="{name}.xlsx"'},
        )

    if payload.kind == 'trades':
        text = trades_to_csv(trades)
    elif payload.kind == 'summary':
        text = summary_to_csv(summaries)
    else:
        text = combined_to_csv(trades, summaries)
    return Response(
        content=text,
        media_type='text/csv; charset=utf-8',
        headers={'Content-Disposition': f'attachment; filename="{name}.csv"'},
    )
