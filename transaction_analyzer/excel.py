from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .models import Transaction
from .summary import TransactionReport

TRANSACTION_HEADERS = ["ID", "Date", "Amount", "Type", "Description", "Merchant"]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def read_workbook_records(path: Path) -> List[Dict[str, Any]]:
    """Read the first worksheet of ``path`` as a list of header-keyed records.

    The first non-blank row is the header. Blank rows are skipped and cells
    are returned as openpyxl produces them (dates as ``datetime``).
    """

    wb = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        header: Optional[List[str]] = None
        records: List[Dict[str, Any]] = []
        for row in ws.iter_rows(values_only=True):
            if all(_is_blank(value) for value in row):
                continue
            if header is None:
                header = [str(value).strip() if value is not None else "" for value in row]
                continue
            records.append(
                {name: value for name, value in zip(header, row) if name}
            )
        return records
    finally:
        wb.close()


def _cell_amount(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


def _autosize(ws, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(str(value)) if value is not None else 0)
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width + 2


def write_report_workbook(
    report: TransactionReport,
    transactions: Sequence[Transaction],
    output_path: Path,
) -> None:
    """Write a "Summary" and a "Transactions" sheet to ``output_path``."""

    wb = Workbook()
    summary_ws = wb.active
    summary_ws.title = "Summary"
    summary_rows: List[List[Any]] = [
        ["Transactions", report.count],
        ["Total Amount", _cell_amount(report.total_amount)],
        ["Average Amount", _cell_amount(report.average_amount)],
        ["Total Debit Amount", _cell_amount(report.total_debit_amount)],
        ["Busiest Month", report.busiest_month],
        ["Busiest Month Count", report.busiest_month_count],
        ["Busiest Debit Month", report.busiest_debit_month],
        ["Busiest Debit Month Count", report.busiest_debit_month_count],
        ["Dominant Type", report.dominant_type.value],
    ]
    summary_ws.append(["Metric", "Value"])
    for row in summary_rows:
        summary_ws.append(row)
    summary_ws.append([])
    summary_ws.append(["Type", "Count"])
    for type_row in report.types:
        summary_ws.append([type_row.type, type_row.count])
    summary_ws.append([])
    summary_ws.append(["Merchant", "Total"])
    for merchant_row in report.merchants:
        summary_ws.append([merchant_row.merchant_name, _cell_amount(merchant_row.total)])
    summary_ws["A1"].font = Font(bold=True)
    summary_ws["B1"].font = Font(bold=True)
    _autosize(summary_ws, ["Metric", "Value"], summary_rows)

    tx_ws = wb.create_sheet("Transactions")
    tx_ws.append(TRANSACTION_HEADERS)
    tx_rows = [
        [
            tx.id,
            tx.date,
            _cell_amount(tx.amount),
            tx.type,
            tx.description,
            tx.merchant_name,
        ]
        for tx in transactions
    ]
    for row in tx_rows:
        tx_ws.append(row)
    for cell in tx_ws[1]:
        cell.font = Font(bold=True)
    _autosize(tx_ws, TRANSACTION_HEADERS, tx_rows)

    wb.save(str(output_path))
