"""The node that scales and shifts pixel values to change brightness and contrast."""

from __future__ import annotations

import logging

import numpy as np

from imgnodes.node import Node, to_preview

log = logging.getLogger(__name__)

BRIGHTNESS_RANGE = (-100.0, 100.0)
CONTRAST_RANGE = (0.0, 3.0)
DEFAULT_BRIGHTNESS = 0.0
DEFAULT_CONTRAST = 1.0


def adjust_brightness_contrast(
    image: np.ndarray, contrast: float, brightness: float
) -> np.ndarray:
    """Return ``image * contrast + brightness`` in the image's own data type.

    Integer images are rounded to the nearest value and saturated to the
    range of their type; floating-point images are left unclipped.
    """
    array = np.asarray(image)
    scaled = array.astype(np.float64) * contrast + brightness
    if np.issubdtype(array.dtype, np.integer):
        limits = np.iinfo(array.dtype)
        return np.clip(np.rint(scaled), limits.min, limits.max).astype(array.dtype)
    return scaled.astype(array.dtype)


class BrightnessContrastNode(Node):
    """Applies a linear brightness/contrast change to its single input."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id, "Brightness/Contrast")
        self.inputs = [None]
        self.brightness = DEFAULT_BRIGHTNESS
        self.contrast = DEFAULT_CONTRAST
        self.output: np.ndarray | None = None
        self.preview: np.ndarray | None = None

    def process(self) -> None:
        source = self.inputs[0]
        if source is None:
            log.info("No input connected!")
            self.output = None
            self.preview = None
        else:
            image = source.get_output()
            if image is None:
                log.info("Input image is empty!")
            else:
                log.info("Input image shape: %s", image.shape)
                self.output = adjust_brightness_contrast(
                    image, self.contrast, self.brightness
                )
                log.info("Output image shape: %s", self.output.shape)
                self.preview = self._make_preview(self.output)
        self.dirty = False

    @staticmethod
    def _make_preview(image: np.ndarray) -> np.ndarray | None:
        try:
            return to_preview(image)
        except ValueError:
            return None

    def get_output(self) -> np.ndarray | None:
        return self.output

    def reset_brightness(self) -> None:
        """Put brightness back to its default and flag the node for recomputation."""
        self.brightness = DEFAULT_BRIGHTNESS
        self.mark_dirty()

    def reset_contrast(self) -> None:
        """Put contrast back to its default and flag the node for recomputation."""
        self.contrast = DEFAULT_CONTRAST
        self.mark_dirty()