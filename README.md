# imgnodes

A small graph of image-processing nodes. Each node takes its input from another
node, does its work and keeps the result for the nodes after it. When a node's
settings or inputs change, it and every node downstream of it are marked dirty,
and `process_graph` processes again each node that is dirty or has a dirty input.

Images are numpy arrays with their channels in BGR order; `None` stands for
"no image".

## Nodes

- `imgnodes.load_image.LoadImageNode`: reads an image file with
  `choose_file(path)` (or asks for one through a file dialog when `path` is
  `None`). The image is read as 8-bit, three-channel BGR; any alpha channel is
  dropped. `read_image` and `write_image` are also available on their own.
- `imgnodes.brightness_contrast.BrightnessContrastNode`: computes
  `pixel * contrast + brightness`. Integer images are rounded and saturated to
  their type's range. Brightness is meant to run from -100 to 100 and contrast
  from 0 to 3; `reset_brightness()` and `reset_contrast()` restore 0 and 1.
- `imgnodes.channel_split.ColorChannelSplitNode`: splits an image into its
  first three channels. With `grayscale` set each channel is a bare
  single-channel plane; otherwise it is a three-channel image holding only that
  channel. `selected_channel` (0, 1 or 2) picks which one `get_output()`
  returns. `split_channels` does the same work as a plain function.
- `imgnodes.blur.BlurNode`: filters its input with a Gaussian kernel of size
  `2 * radius + 1` (sigma `radius / 3`), or, with `directional_blur` set, with a
  kernel that smears along `angle` degrees. `gaussian_kernel`,
  `directional_kernel`, `filter2d` and `kernel_preview` are available on their
  own.

The base class `imgnodes.node.Node` provides `set_input`, `mark_dirty` and
`needs_processing`. `register_node`, `clear_nodes` and `available_nodes` keep
the list of nodes offered as input choices, and `to_preview` turns an 8-bit
image into an RGB preview array.

## Dialogs

`imgnodes.dialogs` offers `open_file_dialog`, `save_file_dialog`,
`select_folder_dialog`, `message_box`, `input_box`, `color_chooser`,
`notify_popup` and `beep`. They use tkinter when a graphic display is
available and plain console prompts otherwise, or always when
`imgnodes.dialogs.settings.force_console` is `True`. Dialog text may not
contain quotes.

## Installation

```
pip install .
```

## Usage

```python
from imgnodes.load_image import LoadImageNode
from imgnodes.brightness_contrast import BrightnessContrastNode
from imgnodes.blur import BlurNode
from imgnodes.app import process_graph

loader = LoadImageNode(1)
loader.choose_file("photo.png")

adjust = BrightnessContrastNode(2)
adjust.set_input(0, loader)
adjust.contrast = 1.5
adjust.brightness = 20

blur = BlurNode(3)
blur.set_input(0, adjust)

process_graph([loader, adjust, blur])
result = blur.get_output()   # numpy array, or None when there is no input
```

`build_graph()` in `imgnodes.app` creates a load, brightness/contrast, channel
split and blur node, registers them and returns them as a named tuple.

## Command line

```
imgnodes photo.png -o result.png --brightness 20 --contrast 1.2
imgnodes photo.png -o blurred.png --blur 5 --angle 45
imgnodes photo.png -o red.png --channel red --grayscale
```

The image runs through brightness/contrast, then the blur when `--blur RADIUS`
(1..20) is given (directional when `--angle` is also given), then the channel
split when `--channel red|green|blue` is given. `--grayscale` writes the split
channel as a single-channel image. `-o/--output` is required; when the input
file is left out it is asked for through a file dialog. The command exits with
status 1 when no image is chosen, it cannot be read, or the result cannot be
written. `imgnodes --help` lists the options.

## What it does not do

There is no interactive editor window: nodes are wired up in code or through
the command line, and the preview arrays the nodes keep (`preview`,
`previews`, `kernel_display`) are computed but not displayed.

## Tests

```
pip install .[test]
pytest
```