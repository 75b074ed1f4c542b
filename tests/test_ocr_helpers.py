"""Tests for OCR transformation helpers."""

from billscan.receipt.ocr_helpers import ocr_result_to_text


def _bbox(x0: int, y0: int, x1: int, y1: int) -> list[list[int]]:
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def test_detections_grouped_into_rows_left_to_right() -> None:
    raw_result = {
        "status": "success",
        "detections": [
            [_bbox(700, 102, 850, 128), ["₹45.00", 0.9]],
            [_bbox(10, 100, 200, 130), ["Milk Packet", 0.95]],
            [_bbox(10, 160, 150, 190), ["Bread", 0.99]],
            [_bbox(700, 160, 850, 190), ["₹40.00", 0.5]],
        ],
    }

    assert ocr_result_to_text(raw_result) == "Milk Packet ₹45.00\nBread"


def test_full_text_is_used_when_present() -> None:
    raw_result = {"full_text": "Milk Packet ₹45.00", "detections": [[_bbox(0, 0, 10, 10), ["ignored", 0.99]]]}

    assert ocr_result_to_text(raw_result) == "Milk Packet ₹45.00"


def test_no_confident_detections() -> None:
    raw_result = {"detections": [[_bbox(0, 0, 10, 10), ["blur", 0.2]]]}

    assert ocr_result_to_text(raw_result) == ""
    assert ocr_result_to_text({}) == ""
