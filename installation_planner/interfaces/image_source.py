"""
Floor-plan image loading.

Decodes uploaded files into RGB arrays and converts them to and from the
data URL blob stored with a project.
"""

import base64
import binascii
import logging
import mimetypes
from pathlib import Path
from typing import Tuple

import cv2
import numpy as np

from ..core.annotation.errors import ValidationError

logger = logging.getLogger(__name__)


def decode_image_bytes(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes.

    Returns:
        RGB image (H, W, 3) as uint8

    Raises:
        ValidationError: If the bytes are not a supported image
    """
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise ValidationError("Unsupported or corrupt image data")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def encode_data_url(image: np.ndarray, extension: str = ".png") -> str:
    """Encode an RGB image as a data URL."""
    bgr = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    ok, encoded = cv2.imencode(extension, bgr)
    if not ok:
        raise ValidationError(f"Cannot encode image as {extension}")
    mime = mimetypes.types_map.get(extension, "image/png")
    payload = base64.b64encode(encoded.tobytes()).decode("ascii")
    return f"data:{mime};base64,{payload}"


def decode_data_url(blob: str) -> np.ndarray:
    """Decode a ``data:image/...;base64,`` blob into an RGB image."""
    if not blob:
        raise ValidationError("Project has no image")
    _, sep, payload = blob.partition(",")
    if not sep:
        payload = blob
    try:
        data = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid image data: {e}") from e
    return decode_image_bytes(data)


def load_image_file(path: Path) -> Tuple[np.ndarray, str]:
    """
    Read a floor plan from disk.

    Returns:
        (RGB image, data URL of the original file bytes)
    """
    path = Path(path)
    data = path.read_bytes()
    image = decode_image_bytes(data)
    mime = mimetypes.guess_type(str(path))[0] or "image/png"
    blob = f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
    logger.debug(f"Loaded {path} ({image.shape[1]}x{image.shape[0]})")
    return image, blob
