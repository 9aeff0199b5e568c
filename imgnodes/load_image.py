"""The node that reads an image file from disk."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image

from imgnodes.dialogs import open_file_dialog
from imgnodes.node import Node, to_preview

IMAGE_FILTERS = ("*.jpg", "*.png", "*.bmp")


def read_image(path: str | os.PathLike[str]) -> np.ndarray:
    """Read a file as an 8-bit, three-channel BGR array; alpha is dropped.

    Raises ``OSError`` when the file is missing or is not an image.
    """
    with Image.open(path) as picture:
        rgb = np.asarray(picture.convert("RGB"), dtype=np.uint8)
    return np.ascontiguousarray(rgb[..., ::-1])


def write_image(path: str | os.PathLike[str], image: np.ndarray) -> None:
    """Write a BGR or single-channel 8-bit array; the format follows the file name."""
    array = np.asarray(image)
    if array.dtype != np.uint8:
        raise ValueError(f"can only write 8-bit images, not {array.dtype}")
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[..., 0]
    if array.ndim == 3 and array.shape[2] == 3:
        array = array[..., ::-1]
    elif array.ndim != 2:
        raise ValueError(f"cannot write an image of shape {array.shape}")
    Image.fromarray(np.ascontiguousarray(array)).save(path)


class LoadImageNode(Node):
    """Source node: holds the image read from the chosen file."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id, "Load Image")
        self.file_path = ""
        self.image: np.ndarray | None = None
        self.preview: np.ndarray | None = None

    def process(self) -> None:
        if self.file_path:
            try:
                self.image = read_image(self.file_path)
            except OSError:
                self.image = None
            if self.image is not None:
                self.preview = to_preview(self.image)
        self.dirty = False

    def get_output(self) -> np.ndarray | None:
        return self.image

    def choose_file(self, path: str | None = None) -> str | None:
        """Load ``path``, or ask for one when it is ``None``; returns the path or ``None``."""
        if path is None:
            path = open_file_dialog(
                "Open Image", "", IMAGE_FILTERS, "Image files", False
            )
        if not path:
            return None
        self.file_path = os.fspath(path)
        self.mark_dirty()
        self.process()
        return self.file_path