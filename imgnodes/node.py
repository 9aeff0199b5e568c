"""The processing node every image operation builds on, and the node registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Node(ABC):
    """A step in the image graph with input slots and a dirty flag.

    Images are numpy arrays in BGR channel order; ``None`` stands for no image.
    """

    def __init__(self, node_id: int, name: str) -> None:
        self.id = node_id
        self.name = name
        self.inputs: list[Node | None] = []
        self.outputs: list[Node | None] = []
        self.dirty = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self.name!r})"

    @abstractmethod
    def process(self) -> None:
        """Recompute the node's output and clear the dirty flag."""

    @abstractmethod
    def get_output(self) -> np.ndarray | None:
        """Return the node's current output image, or ``None`` when there is none."""

    def set_input(self, index: int, node: Node | None) -> None:
        """Connect ``node`` to input slot ``index``; slots that do not exist are ignored."""
        if 0 <= index < len(self.inputs):
            self.inputs[index] = node
            self.mark_dirty()

    def mark_dirty(self) -> None:
        """Flag this node and every node downstream of it for recomputation."""
        pending: list[Node] = [self]
        seen: set[int] = set()
        while pending:
            node = pending.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            node.dirty = True
            pending.extend(output for output in node.outputs if output is not None)

    def needs_processing(self) -> bool:
        """True when this node or one of its connected inputs is dirty."""
        return self.dirty or any(node is not None and node.dirty for node in self.inputs)


_available: list[Node] = []


def register_node(node: Node) -> None:
    """Offer ``node`` as a choice for other nodes' inputs."""
    _available.append(node)


def clear_nodes() -> None:
    """Forget every registered node."""
    _available.clear()


def available_nodes() -> list[Node]:
    """Return the registered nodes in the order they were registered."""
    return list(_available)


def to_preview(image: np.ndarray) -> np.ndarray:
    """Turn an 8-bit BGR or single-channel image into an RGB preview array."""
    array = np.asarray(image)
    if array.dtype != np.uint8:
        raise ValueError(f"preview needs 8-bit data, not {array.dtype}")
    if array.ndim == 3 and array.shape[2] == 3:
        return np.ascontiguousarray(array[..., ::-1])
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[..., 0]
    if array.ndim == 2:
        return np.repeat(array[..., np.newaxis], 3, axis=2)
    raise ValueError(f"cannot preview an image of shape {array.shape}")