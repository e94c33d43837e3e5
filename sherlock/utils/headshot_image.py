"""
Headshot image helpers (OpenCV).

Frames are BGR numpy arrays as produced by cv2.imdecode / VideoCapture.
Boxes are [x, y, width, height] in source-frame pixel coordinates.
"""
from typing import Sequence, Tuple

import cv2
import numpy as np


def padded_crop_region(
    box: Sequence[float],
    frame_width: int,
    frame_height: int,
    padding_ratio: float = 0.2,
) -> Tuple[int, int, int, int]:
    """
    Expand `box` by `padding_ratio` of its width/height on each side and clamp
    it to the frame. Returns integer (left, top, right, bottom), right/bottom exclusive.
    """
    x, y, width, height = (float(v) for v in box)
    pad_x = width * padding_ratio
    pad_y = height * padding_ratio

    left = max(0, int(round(x - pad_x)))
    top = max(0, int(round(y - pad_y)))
    right = min(frame_width, int(round(x + width + pad_x)))
    bottom = min(frame_height, int(round(y + height + pad_y)))
    return left, top, right, bottom


def crop_face(frame: np.ndarray, box: Sequence[float], padding_ratio: float = 0.2) -> np.ndarray:
    """
    Crop the face region plus padding out of `frame`.

    Raises:
        ValueError: if the frame is empty or the padded region has no area
    """
    if frame is None or frame.size == 0:
        raise ValueError("Frame is empty")
    if len(box) != 4:
        raise ValueError(f"Bounding box must have 4 values, got {len(box)}")

    frame_height, frame_width = frame.shape[:2]
    left, top, right, bottom = padded_crop_region(box, frame_width, frame_height, padding_ratio)
    if right <= left or bottom <= top:
        raise ValueError(f"Bounding box {list(box)} lies outside the {frame_width}x{frame_height} frame")
    return frame[top:bottom, left:right].copy()


def encode_jpeg(image: np.ndarray, quality: int = 90) -> bytes:
    """Encode an image as JPEG bytes."""
    success, buffer = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    if not success:
        raise ValueError("JPEG encoding failed")
    return buffer.tobytes()


def decode_image(data: bytes) -> np.ndarray:
    """Decode JPEG/PNG bytes into a BGR frame."""
    buffer = np.frombuffer(data, dtype=np.uint8)
    frame = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if frame is None:
        raise ValueError("Could not decode image bytes")
    return frame
