"""The node that splits a colour image into its first three channels."""

from __future__ import annotations

import logging

import numpy as np

from imgnodes.node import Node, to_preview

log = logging.getLogger(__name__)

CHANNEL_LABELS = ("Red", "Green", "Blue")


def _channel_count(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else image.shape[2]


def split_channels(
    image: np.ndarray, grayscale: bool = False
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Split the first three channels of ``image``.

    With ``grayscale`` each result is the bare single-channel plane. Otherwise
    each result is a three-channel image holding that plane at its own position
    and zeros in the other two. Raises ``ValueError`` for fewer than three channels.
    """
    array = np.asarray(image)
    if array.ndim not in (2, 3) or _channel_count(array) < 3:
        raise ValueError(f"need an image with at least three channels, got shape {array.shape}")
    planes = [array[..., index] for index in range(3)]
    if grayscale:
        return tuple(np.ascontiguousarray(plane) for plane in planes)
    coloured = []
    for index, plane in enumerate(planes):
        merged = np.zeros(plane.shape + (3,), dtype=array.dtype)
        merged[..., index] = plane
        coloured.append(merged)
    return tuple(coloured)


class ColorChannelSplitNode(Node):
    """Splits its single input into three channel images; one is its output."""

    def __init__(self, node_id: int) -> None:
        super().__init__(node_id, "Channel Splitter")
        self.inputs = [None]
        self.outputs = [None] * 4
        self.grayscale = False
        self.selected_channel = 0
        self.channels: list[np.ndarray | None] = [None, None, None]
        self.previews: list[np.ndarray | None] = [None, None, None]

    @property
    def red_channel(self) -> np.ndarray | None:
        return self.channels[0]

    @property
    def green_channel(self) -> np.ndarray | None:
        return self.channels[1]

    @property
    def blue_channel(self) -> np.ndarray | None:
        return self.channels[2]

    def process(self) -> None:
        self.previews = [None, None, None]
        source = self.inputs[0]
        if source is None:
            log.info("No input connected!")
            self.channels = [None, None, None]
        else:
            image = source.get_output()
            if image is None or _channel_count(np.asarray(image)) < 3:
                log.info("Input image is empty or has insufficient channels!")
            else:
                log.info("Input image shape: %s", image.shape)
                self.channels = list(split_channels(image, self.grayscale))
                self.previews = [self._make_preview(channel) for channel in self.channels]
        self.dirty = False

    @staticmethod
    def _make_preview(image: np.ndarray) -> np.ndarray | None:
        try:
            return to_preview(image)
        except ValueError:
            return None

    def get_output(self) -> np.ndarray | None:
        if self.selected_channel in (0, 1, 2):
            return self.channels[self.selected_channel]
        return self.channels[0]