"""Image I/O using OpenCV."""

import cv2
import numpy as np


def rgb_to_luminance(rgb: np.ndarray) -> np.ndarray:
    """RGB uint8 to BT.601 luma in [0, 1]."""
    rgb = rgb.astype(np.float64) / 255.0
    return 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]


def load_luminance(path: str) -> np.ndarray:
    """Load image as float64 luminance in [0, 1]."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError(f"Could not load image from {path}")
    return rgb_to_luminance(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))


def to_uint8(gray: np.ndarray) -> np.ndarray:
    """Clamp to [0, 1] and quantize to 8-bit."""
    return np.round(np.clip(gray, 0.0, 1.0) * 255.0).astype(np.uint8)


def save_luminance(gray: np.ndarray, path: str) -> None:
    """Save luminance image as 8-bit grayscale."""
    if not cv2.imwrite(str(path), to_uint8(gray)):
        raise ValueError(f"Could not write image to {path}")
