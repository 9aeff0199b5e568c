"""The command that loads an image, runs it through the node graph and saves it."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, NamedTuple

from imgnodes.blur import RADIUS_RANGE, BlurNode
from imgnodes.brightness_contrast import (
    BRIGHTNESS_RANGE,
    CONTRAST_RANGE,
    DEFAULT_BRIGHTNESS,
    DEFAULT_CONTRAST,
    BrightnessContrastNode,
)
from imgnodes.channel_split import ColorChannelSplitNode
from imgnodes.load_image import LoadImageNode, write_image
from imgnodes.node import Node, clear_nodes, register_node

CHANNELS = {"red": 0, "green": 1, "blue": 2}


class Graph(NamedTuple):
    """The editor's nodes, iterated in the order they are processed."""

    load: LoadImageNode
    brightness_contrast: BrightnessContrastNode
    channel_split: ColorChannelSplitNode
    blur: BlurNode


def build_graph() -> Graph:
    """Create the four nodes and register them as input choices."""
    load = LoadImageNode(1)
    brightness_contrast = BrightnessContrastNode(2)
    channel_split = ColorChannelSplitNode(3)
    blur = BlurNode(4)

    clear_nodes()
    for node in (load, brightness_contrast, blur, channel_split):
        register_node(node)
    return Graph(load, brightness_contrast, channel_split, blur)


def process_graph(nodes: Iterable[Node]) -> list[Node]:
    """Process, in order, each node that is dirty or has a dirty input; return those."""
    processed = []
    for node in nodes:
        if node.needs_processing():
            node.process()
            processed.append(node)
    return processed


def _ranged(kind, low, high):
    def parse(text: str):
        try:
            value = kind(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid value: {text!r}") from None
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(f"{value} is outside {low}..{high}")
        return value

    return parse


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgnodes",
        description="Adjust, blur or split an image through the node graph.",
    )
    parser.add_argument("input", nargs="?", help="image to load; asked for when omitted")
    parser.add_argument("-o", "--output", required=True, help="file to write the result to")
    parser.add_argument(
        "--brightness",
        type=_ranged(float, *BRIGHTNESS_RANGE),
        default=DEFAULT_BRIGHTNESS,
        help="value added to every pixel (-100..100)",
    )
    parser.add_argument(
        "--contrast",
        type=_ranged(float, *CONTRAST_RANGE),
        default=DEFAULT_CONTRAST,
        help="factor every pixel is scaled by (0..3)",
    )
    parser.add_argument(
        "--blur",
        type=_ranged(int, *RADIUS_RANGE),
        metavar="RADIUS",
        help="blur with this radius in pixels (1..20)",
    )
    parser.add_argument(
        "--angle",
        type=_ranged(float, 0.0, 360.0),
        help="make the blur directional along this angle in degrees",
    )
    parser.add_argument(
        "--channel", choices=sorted(CHANNELS), help="keep only this split channel"
    )
    parser.add_argument(
        "--grayscale",
        action="store_true",
        help="write a split channel as a single-channel image",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the exit status."""
    args = _parser().parse_args(argv)
    graph = build_graph()

    graph.brightness_contrast.brightness = args.brightness
    graph.brightness_contrast.contrast = args.contrast
    graph.brightness_contrast.set_input(0, graph.load)
    last: Node = graph.brightness_contrast

    if args.blur is not None:
        graph.blur.radius = args.blur
        if args.angle is not None:
            graph.blur.directional_blur = True
            graph.blur.angle = args.angle
        graph.blur.set_input(0, last)
        last = graph.blur

    if args.channel is not None:
        graph.channel_split.grayscale = args.grayscale
        graph.channel_split.selected_channel = CHANNELS[args.channel]
        graph.channel_split.set_input(0, last)
        last = graph.channel_split

    if graph.load.choose_file(args.input) is None:
        print("No image chosen.", file=sys.stderr)
        return 1
    if graph.load.get_output() is None:
        print(f"Could not read image: {graph.load.file_path}", file=sys.stderr)
        return 1

    process_graph([graph.load, graph.brightness_contrast, graph.blur, graph.channel_split])

    result = last.get_output()
    if result is None:
        print("The graph produced no image.", file=sys.stderr)
        return 1
    try:
        write_image(args.output, result)
    except (OSError, ValueError) as error:
        print(f"Could not write {args.output}: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())