"""FastAPI server for parsing uploaded bills and browsing saved records."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from billscan.application.bills.scan import parse_with_project_rules
from billscan.receipt.formatter import format_invoice_html
from billscan.receipt.serialization import record_to_dict
from billscan.runtime.logging import get_logger
from billscan.runtime.paths import get_paths
from billscan.runtime.record_storage import (
    RecordNotFound,
    StoredRecord,
    delete_record,
    list_records,
    load_record,
    save_record,
)
from billscan.runtime.text_acquisition import OCRServiceUnavailable, TextAcquisitionError, acquire_text_from_bytes

logger = get_logger(__name__)


class ParseTextRequest(BaseModel):
    text: str
    save: bool = False
    file_name: str = "pasted.txt"


def _stored_summary(stored: StoredRecord) -> dict[str, Any]:
    return {
        "id": stored.record_id,
        "parsedAt": stored.parsed_at.isoformat(),
        "fileName": stored.file_name,
        "merchant": stored.record.merchant,
        "date": stored.record.date,
        "category": stored.record.category,
        "grand": float(stored.record.totals.grand),
    }


def _not_found(record_id: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": f"Record not found: {record_id}"}, status_code=404)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create data directories on startup."""
    get_paths().ensure_directories()
    yield


app = FastAPI(title="Bill Scanner", lifespan=lifespan)


@app.post("/parse")
async def parse_text(payload: ParseTextRequest) -> JSONResponse:
    """Parse raw bill text posted as JSON."""
    record = parse_with_project_rules(payload.text)
    body: dict[str, Any] = {"status": "success", "record": record_to_dict(record)}
    if payload.save:
        stored = save_record(record, file_name=payload.file_name)
        body["id"] = stored.record_id
    return JSONResponse(body)


@app.post("/upload")
async def upload_bill(request: Request, save: bool = False) -> JSONResponse:
    """Receive a bill document (text, PDF or image), parse it, optionally save it."""
    form = await request.form()

    upload = None
    for key, value in form.items():
        logger.debug("Form field: key=%r, type=%s", key, type(value))
        if hasattr(value, "read"):
            upload = value
            break

    if upload is None:
        return JSONResponse({"status": "error", "message": "No file found in request"}, status_code=400)

    file_name = getattr(upload, "filename", None) or "uploaded"
    contents = await upload.read()

    try:
        raw_text = await run_in_threadpool(acquire_text_from_bytes, file_name, contents)
    except OCRServiceUnavailable as e:
        logger.error("OCR service unavailable: %s", e)
        return JSONResponse({"status": "error", "message": "OCR service unavailable"}, status_code=503)
    except TextAcquisitionError as e:
        logger.warning("Could not read upload %s: %s", file_name, e)
        return JSONResponse({"status": "error", "message": str(e)}, status_code=422)

    record = parse_with_project_rules(raw_text)
    logger.info("Parsed %s: %s, %d items", file_name, record.merchant, len(record.items))

    body: dict[str, Any] = {
        "status": "success",
        "fileName": file_name,
        "sizeBytes": len(contents),
        "record": record_to_dict(record),
    }
    if save:
        stored = save_record(record, file_name=file_name)
        body["id"] = stored.record_id
    return JSONResponse(body)


@app.get("/records")
async def get_records() -> dict[str, Any]:
    """List saved records, newest first."""
    return {"records": [_stored_summary(stored) for stored in list_records()]}


@app.get("/records/{record_id}", response_model=None)
async def get_record(record_id: int) -> dict[str, Any] | JSONResponse:
    try:
        stored = load_record(record_id)
    except RecordNotFound:
        return _not_found(record_id)
    return {**_stored_summary(stored), "record": record_to_dict(stored.record)}


@app.delete("/records/{record_id}", response_model=None)
async def remove_record(record_id: int) -> dict[str, str] | JSONResponse:
    try:
        delete_record(record_id)
    except RecordNotFound:
        return _not_found(record_id)
    return {"status": "deleted"}


@app.get("/records/{record_id}/invoice", response_model=None)
async def get_record_invoice(record_id: int) -> HTMLResponse | JSONResponse:
    """Render a saved record as an HTML invoice."""
    try:
        stored = load_record(record_id)
    except RecordNotFound:
        return _not_found(record_id)
    html = format_invoice_html(stored.record, file_name=stored.file_name, generated_on=date.today())
    return HTMLResponse(html)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
