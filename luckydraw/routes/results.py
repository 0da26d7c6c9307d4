"""Results export routes."""

from __future__ import annotations

from datetime import datetime

from flask import Blueprint

from luckydraw.engine import get_engine
from luckydraw.schemas.award import WinnerRecordSchema
from luckydraw.services.spreadsheet_service import result_rows, write_workbook
from luckydraw.utils.responses import ok, xlsx_download

results_bp = Blueprint("results", __name__)

_records_schema = WinnerRecordSchema(many=True)


@results_bp.get("/results")
def list_results():
    engine = get_engine()
    records = engine.ledger.records()
    return ok({"total": len(records), "records": _records_schema.dump(records)})


@results_bp.get("/results/export.xlsx")
def export_results():
    records = get_engine().exportable_results()
    filename = f"draw_results_{datetime.now().strftime('%Y%m%d')}.xlsx"
    return xlsx_download(write_workbook(result_rows(records), "results"), filename)
