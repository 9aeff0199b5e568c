"""The node that blurs its input with a Gaussian or a directional kernel."""

from __future__ import annotations

import logging
import math

import numpy as np

from imgnodes.node import Node, to_preview

log = logging.getLogger(__name__)

RADIUS_RANGE = (1, 20)
ANGLE_RANGE = (0.0, 360.0)
DEFAULT_RADIUS = 5
DEFAULT_ANGLE = 0.0


def gaussian_kernel(size: int, sigma: float) -> np.ndarray:
    """Return a normalised ``size`` x ``size`` Gaussian kernel (float64).

    A ``sigma`` that is not positive is derived from the size.
    """
    if size < 1:
        raise ValueError(f"kernel size must be positive, not {size!r}")
    if sigma <= 0:
        sigma = 0.3 * ((size - 1) * 0.5 - 1) + 0.8
    offsets = np.arange(size, dtype=np.float64) - (size - 1) / 2
    column = np.exp(-(offsets**2) / (2.0 * sigma * sigma))
    column /= column.sum()
    return np.outer(column, column)


def directional_kernel(size: int, angle: float) -> np.ndarray:
    """Return a normalised float32 kernel that smears along the line at ``angle`` degrees."""
    if size < 1:
        raise ValueError(f"kernel size must be positive, not {size!r}")
    radians = angle * math.pi / 180.0
    dx = math.cos(radians)
    dy = math.sin(radians)
    coords = np.arange(size) - size // 2
    y = coords[:, np.newaxis]
    x = coords[np.newaxis, :]
    distance = np.abs(x * dy - y * dx) / math.hypot(dx, dy)
    kernel = np.exp(-(distance**2) / 2.0)
    return (kernel / kernel.sum()).astype(np.float32)


def filter2d(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Correlate ``image`` with ``kernel``, keeping the image's data type.

    The kernel is anchored at its centre, borders are mirrored without
    repeating the edge pixel, and integer results are rounded and saturated.
    """
    array = np.asarray(image)
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2 or weights.size == 0:
        raise ValueError(f"kernel must be a non-empty 2-D array, got shape {weights.shape}")
    if array.ndim not in (2, 3) or array.size == 0:
        raise ValueError(f"cannot filter an image of shape {array.shape}")

    rows, cols = weights.shape
    anchor_y, anchor_x = rows // 2, cols // 2
    padding = [(anchor_y, rows - 1 - anchor_y), (anchor_x, cols - 1 - anchor_x)]
    padding += [(0, 0)] * (array.ndim - 2)
    padded = np.pad(array.astype(np.float64), padding, mode="reflect")

    height, width = array.shape[:2]
    result = np.zeros(array.shape, dtype=np.float64)
    for (i, j), weight in np.ndenumerate(weights):
        if weight:
            result += weight * padded[i : i + height, j : j + width]

    if np.issubdtype(array.dtype, np.integer):
        limits = np.iinfo(array.dtype)
        return np.clip(np.rint(result), limits.min, limits.max).astype(array.dtype)
    return result.astype(array.dtype)


def kernel_preview(kernel: np.ndarray) -> np.ndarray:
    """Stretch a kernel to 0-255 and return it as an 8-bit three-channel image."""
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2 or weights.size == 0:
        raise ValueError(f"kernel must be a non-empty 2-D array, got shape {weights.shape}")
    low, high = weights.min(), weights.max()
    span = high - low
    if span > np.finfo(np.float64).eps:
        scaled = (weights - low) * (255.0 / span)
    else:
        scaled = np.zeros_like(weights)
    gray = np.clip(np.rint(scaled), 0, 255).astype(np.uint8)
    return np.repeat(gray[..., np.newaxis], 3, axis=2)


class BlurNode(Node):
    """Blurs its single input; Gaussian by default, directional when enabled."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id, "Blur")
        self.inputs = [None]
        self.radius = DEFAULT_RADIUS
        self.directional_blur = False
        self.angle = DEFAULT_ANGLE
        self.output: np.ndarray | None = None
        self.preview: np.ndarray | None = None
        self.kernel_display: np.ndarray | None = None

    def kernel(self) -> np.ndarray:
        """Return the kernel the current settings describe."""
        size = 2 * self.radius + 1
        if self.directional_blur:
            return directional_kernel(size, self.angle)
        return gaussian_kernel(size, self.radius / 3.0)

    def process(self) -> None:
        log.info("Processing Blur Node...")
        source = self.inputs[0]
        image = source.get_output() if source is not None else None
        if image is None:
            self.output = None
        else:
            weights = self.kernel()
            self.output = filter2d(image, weights)
            try:
                self.preview = to_preview(self.output)
            except ValueError:
                self.preview = None
            self.kernel_display = kernel_preview(weights)
        self.dirty = False

    def get_output(self) -> np.ndarray | None:
        return self.output