"""Runtime helpers that turn bill documents into raw text (non-HTTP)."""

import json
import os
import time
from pathlib import Path
from typing import Any

import httpx

from billscan.receipt.ocr_helpers import ocr_result_to_text, resize_image_bytes
from billscan.runtime.logging import get_logger
from billscan.runtime.paths import get_paths

logger = get_logger(__name__)

DEFAULT_OCR_URL = "http://localhost:8001"
OCR_TIMEOUT_SECONDS = 60.0

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff", ".heic"})
PDF_SUFFIXES = frozenset({".pdf"})


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


class TextAcquisitionError(RuntimeError):
    """Raised when a document cannot be turned into text."""


def default_ocr_url() -> str:
    """OCR service URL from BILLSCAN_OCR_URL, else the local default."""
    return os.environ.get("BILLSCAN_OCR_URL", DEFAULT_OCR_URL)


def call_ocr_service(file_name: str, image_bytes: bytes, ocr_url: str) -> tuple[dict[str, Any], str]:
    """
    Send an image to the OCR service.

    Returns:
        Tuple of (raw_result, text).
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending %s to OCR service at %s...", file_name, ocr_url)

    try:
        resized_bytes = resize_image_bytes(image_bytes)
    except OSError as e:
        raise TextAcquisitionError(f"Unreadable image {file_name}: {e}") from e

    try:
        start_time = time.time()
        response = httpx.post(
            f"{ocr_url}/ocr",
            files={"file": (file_name, resized_bytes, "image/jpeg")},
            timeout=OCR_TIMEOUT_SECONDS,
        )
        elapsed_time = time.time() - start_time
        logger.info("OCR service returned in %.2f seconds", elapsed_time)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e

    if response.status_code != 200:
        # Response bodies may echo bill text; log the status only
        logger.error("OCR service error: %s", response.status_code)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    raw_result = response.json()
    return raw_result, ocr_result_to_text(raw_result)


def save_ocr_json(ocr_result: dict[str, Any], source_name: str) -> Path:
    """Save a raw OCR response for debugging."""
    ocr_dir = get_paths().ocr_json
    ocr_dir.mkdir(parents=True, exist_ok=True)
    ocr_json_path = ocr_dir / f"{Path(source_name).stem}.json"
    ocr_json_path.write_text(json.dumps(ocr_result, indent=2))
    logger.debug("OCR JSON saved to: %s", ocr_json_path)
    return ocr_json_path


def extract_pdf_text(pdf_bytes: bytes, file_name: str = "document.pdf") -> str:
    """Extract the text layer of a PDF, one block per page."""
    import io

    import pdfplumber

    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        # pdfplumber surfaces pdfminer's parser errors, which share no base class
        logger.error("PDF extraction failed for %s: %s", file_name, e)
        raise TextAcquisitionError(f"Could not read PDF {file_name}: {e}") from e

    logger.debug("Extracted %d pages of text from %s", len(pages), file_name)
    return "\n" + "\n\n".join(pages) + "\n"


def decode_text_bytes(data: bytes) -> str:
    """Decode plain-text bytes as UTF-8, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


def acquire_text_from_bytes(
    file_name: str,
    data: bytes,
    ocr_url: str | None = None,
    keep_ocr_json: bool = False,
) -> str:
    """
    Turn an uploaded document into raw bill text, dispatching on file suffix.

    PDFs use their text layer, images go through the OCR service, anything
    else is read as UTF-8 text.
    """
    suffix = Path(file_name).suffix.lower()
    if suffix in PDF_SUFFIXES:
        return extract_pdf_text(data, file_name)
    if suffix in IMAGE_SUFFIXES:
        raw_result, text = call_ocr_service(file_name, data, ocr_url or default_ocr_url())
        if keep_ocr_json:
            save_ocr_json(raw_result, file_name)
        return text
    return decode_text_bytes(data)


def acquire_text(path: Path, ocr_url: str | None = None, keep_ocr_json: bool = False) -> str:
    """Read a bill document from disk and return its raw text."""
    if not path.exists():
        raise FileNotFoundError(f"Bill file not found: {path}")
    return acquire_text_from_bytes(path.name, path.read_bytes(), ocr_url=ocr_url, keep_ocr_json=keep_ocr_json)
