"""Number pool routes (controllers). No business logic here."""

from __future__ import annotations

import io

from flask import Blueprint, request

from luckydraw.engine import get_engine
from luckydraw.errors import InvalidPoolError
from luckydraw.schemas.pool import PoolLoadSchema, PoolSchema, TemplateQuerySchema
from luckydraw.services.number_pool import sort_identifiers
from luckydraw.services.spreadsheet_service import (
    identifiers_from_rows,
    read_rows,
    template_rows,
    write_workbook,
)
from luckydraw.utils.responses import ok, xlsx_download

pool_bp = Blueprint("pool", __name__)

_load_schema = PoolLoadSchema()
_pool_schema = PoolSchema()
_template_schema = TemplateQuerySchema()


def _pool_payload() -> dict:
    pool = get_engine().pool
    return _pool_schema.dump(
        {
            "size": pool.size,
            "drawn": pool.drawn_count,
            "available_count": pool.available_count,
            "available": pool.available(),
        }
    )


@pool_bp.get("/pool")
def get_pool():
    return ok(_pool_payload())


@pool_bp.post("/pool")
def load_pool():
    """Replace the pool with a JSON list of identifiers."""

    payload = request.get_json(silent=True) or {}
    data = _load_schema.load(payload)

    identifiers = [str(i).strip() for i in data["identifiers"]]
    if data["sort"]:
        identifiers = sort_identifiers(identifiers)
    get_engine().load_pool(identifiers)
    return ok(_pool_payload())


@pool_bp.post("/pool/import")
def import_pool():
    """Replace the pool from the first column of an uploaded xlsx file."""

    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise InvalidPoolError(message="No spreadsheet uploaded", details={"file": ["Required"]})

    identifiers = identifiers_from_rows(read_rows(io.BytesIO(upload.read())))
    if not identifiers:
        raise InvalidPoolError(message="Spreadsheet contains no numbers")

    get_engine().load_pool(identifiers)
    return ok(_pool_payload())


@pool_bp.get("/pool/template.xlsx")
def download_template():
    query = _template_schema.load(request.args.to_dict())
    rows = template_rows(int(query["start"]), int(query["end"]), int(query["width"]))
    return xlsx_download(write_workbook(rows, "numbers"), "number_template.xlsx")
