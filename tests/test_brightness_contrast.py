import numpy as np
import pytest

from imgnodes.brightness_contrast import (
    BrightnessContrastNode,
    adjust_brightness_contrast,
)
from imgnodes.load_image import LoadImageNode, write_image
from imgnodes.node import Node


class _Source(Node):
    def __init__(self, image):
        super().__init__(99, "Source")
        self.image = image

    def process(self):
        self.dirty = False

    def get_output(self):
        return self.image


@pytest.fixture
def image():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(4, 5, 3), dtype=np.uint8)


def test_identity_adjustment_keeps_image(image):
    result = adjust_brightness_contrast(image, 1.0, 0.0)
    assert result.dtype == np.uint8
    assert np.array_equal(result, image)


def test_saturates_high_and_low():
    bright = np.full((2, 2), 200, dtype=np.uint8)
    dark = np.full((2, 2), 10, dtype=np.uint8)
    high = adjust_brightness_contrast(bright, 2.0, 0.0)
    low = adjust_brightness_contrast(dark, 1.0, -100.0)
    assert high.tolist() == [[255, 255], [255, 255]]
    assert low.tolist() == [[0, 0], [0, 0]]


def test_brightness_is_monotonic(image):
    low = adjust_brightness_contrast(image, 1.0, -20.0)
    high = adjust_brightness_contrast(image, 1.0, 20.0)
    assert np.all(low <= image)
    assert np.all(high >= image)
    assert low.shape == image.shape == high.shape


def test_zero_contrast_gives_constant_image(image):
    result = adjust_brightness_contrast(image, 0.0, 42.0)
    assert result.dtype == np.uint8
    assert np.array_equal(result, np.full(image.shape, 42, dtype=np.uint8))


def test_float_images_are_not_clipped():
    data = np.array([[300.0, -5.0]], dtype=np.float32)
    result = adjust_brightness_contrast(data, 1.0, 0.0)
    assert result.dtype == np.float32
    assert np.array_equal(result, data)


def test_new_node_defaults():
    node = BrightnessContrastNode(2)
    assert node.id == 2
    assert node.name == "Brightness/Contrast"
    assert node.inputs == [None]
    assert node.brightness == 0.0
    assert node.contrast == 1.0
    assert node.dirty is True
    assert node.get_output() is None


def test_process_without_input_clears_output():
    node = BrightnessContrastNode(2)
    node.process()
    assert node.get_output() is None
    assert node.preview is None
    assert node.dirty is False


def test_process_applies_settings(image):
    source = _Source(image)
    node = BrightnessContrastNode(2)
    node.set_input(0, source)
    node.brightness = 30.0
    node.contrast = 1.5
    node.process()
    expected = adjust_brightness_contrast(image, 1.5, 30.0)
    assert np.array_equal(node.get_output(), expected)
    assert np.array_equal(node.preview[..., 0], expected[..., 2])
    assert node.dirty is False


def test_empty_input_keeps_previous_output(image):
    source = _Source(image)
    node = BrightnessContrastNode(2)
    node.set_input(0, source)
    node.process()
    source.image = None
    node.mark_dirty()
    node.process()
    assert np.array_equal(node.get_output(), image)


def test_disconnecting_clears_output(image):
    node = BrightnessContrastNode(2)
    node.set_input(0, _Source(image))
    node.process()
    node.set_input(0, None)
    assert node.dirty is True
    node.process()
    assert node.get_output() is None
    assert node.preview is None


def test_set_input_out_of_range_is_ignored(image):
    node = BrightnessContrastNode(2)
    node.process()
    node.set_input(3, _Source(image))
    assert node.inputs == [None]
    assert node.dirty is False


def test_resets_restore_defaults_and_mark_dirty():
    node = BrightnessContrastNode(2)
    node.brightness = 55.0
    node.contrast = 2.5
    node.process()
    node.reset_brightness()
    assert node.brightness == 0.0
    assert node.dirty is True
    node.process()
    node.reset_contrast()
    assert node.contrast == 1.0
    assert node.dirty is True


def test_needs_processing_follows_upstream(image):
    source = _Source(image)
    node = BrightnessContrastNode(2)
    node.set_input(0, source)
    source.process()
    node.process()
    assert node.needs_processing() is False
    source.dirty = True
    assert node.needs_processing() is True


def test_chain_from_loaded_file(tmp_path, image):
    path = tmp_path / "picture.png"
    write_image(path, image)
    loader = LoadImageNode(1)
    loader.choose_file(str(path))
    node = BrightnessContrastNode(2)
    node.set_input(0, loader)
    node.contrast = 0.5
    node.process()
    expected = adjust_brightness_contrast(loader.get_output(), 0.5, 0.0)
    assert np.array_equal(node.get_output(), expected)