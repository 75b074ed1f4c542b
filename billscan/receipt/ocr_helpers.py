"""Pure OCR transformation helpers for bill text acquisition."""

import io
from typing import Any

MAX_IMAGE_DIMENSION = 3000  # Resize if either dimension exceeds this
OCR_IMAGE_PADDING = 50  # White padding around image to prevent edge truncation

MIN_DETECTION_CONFIDENCE = 0.7


def resize_image_bytes(
    image_bytes: bytes, max_dimension: int = MAX_IMAGE_DIMENSION, padding: int = OCR_IMAGE_PADDING
) -> bytes:
    """
    Resize image bytes if it exceeds max_dimension on either side.

    Also adds white padding around the image to prevent OCR edge truncation.

    Args:
        image_bytes: Image data as bytes
        max_dimension: Maximum allowed dimension (width or height)
        padding: White padding to add around image (pixels)

    Returns:
        Image bytes (JPEG format), resized if necessary, with padding added
    """
    from PIL import Image, ImageOps

    img = Image.open(io.BytesIO(image_bytes))

    # Apply EXIF orientation so phone photos are read upright
    img = ImageOps.exif_transpose(img)

    width, height = img.size
    if width <= max_dimension and height <= max_dimension:
        img_final = img
    else:
        if width > height:
            new_width = max_dimension
            new_height = int(height * (max_dimension / width))
        else:
            new_height = max_dimension
            new_width = int(width * (max_dimension / height))
        img_final = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    if padding > 0:
        img_final = ImageOps.expand(img_final, border=padding, fill="white")

    buffer = io.BytesIO()
    img_final.convert("RGB").save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


def _adaptive_row_threshold(detections: list[dict[str, Any]]) -> float:
    """Compute the max center-Y distance for two detections to share a row."""
    heights = sorted(det["y_max"] - det["y_min"] for det in detections if det["y_max"] > det["y_min"])
    if not heights:
        return 12.0
    median_height = heights[len(heights) // 2]
    # Larger text -> larger tolerance, clamped to avoid cross-row merges
    return max(6.0, min(30.0, median_height * 0.5))


def ocr_result_to_text(raw_result: dict[str, Any], min_confidence: float = MIN_DETECTION_CONFIDENCE) -> str:
    """
    Convert an OCR service response into line-oriented plain text.

    The response carries ``detections`` as ``[bbox, [text, confidence]]``
    pairs, bbox being four ``[x, y]`` points. A ``full_text`` field, when
    present and non-empty, is used as-is. Detections are grouped into rows
    by vertical center, and each row is read left to right.
    """
    full_text = raw_result.get("full_text")
    if isinstance(full_text, str) and full_text.strip():
        return full_text

    detections: list[dict[str, Any]] = []
    for detection in raw_result.get("detections", []):
        bbox, (text, confidence) = detection
        if confidence < min_confidence or not str(text).strip():
            continue
        y_coords = [point[1] for point in bbox]
        detections.append(
            {
                "text": str(text).strip(),
                "center_y": sum(y_coords) / len(y_coords),
                "y_min": min(y_coords),
                "y_max": max(y_coords),
                "min_x": min(point[0] for point in bbox),
            }
        )

    if not detections:
        return ""

    detections.sort(key=lambda d: (d["center_y"], d["min_x"]))
    threshold = _adaptive_row_threshold(detections)

    rows: list[list[dict[str, Any]]] = []
    for det in detections:
        if rows:
            row = rows[-1]
            row_center = sum(d["center_y"] for d in row) / len(row)
            if abs(det["center_y"] - row_center) <= threshold:
                row.append(det)
                continue
        rows.append([det])

    lines = []
    for row in rows:
        row.sort(key=lambda d: d["min_x"])
        lines.append(" ".join(d["text"] for d in row))
    return "\n".join(lines)
