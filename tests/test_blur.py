import numpy as np
import pytest

from imgnodes.blur import (
    BlurNode,
    directional_kernel,
    filter2d,
    gaussian_kernel,
    kernel_preview,
)
from imgnodes.node import Node


class _Source(Node):
    def __init__(self, image):
        super().__init__(99, "Source")
        self.image = image

    def process(self):
        self.dirty = False

    def get_output(self):
        return self.image


def test_gaussian_kernel_is_normalised_and_symmetric():
    kernel = gaussian_kernel(11, 5 / 3.0)
    assert kernel.shape == (11, 11)
    assert kernel.sum() == pytest.approx(1.0)
    assert np.allclose(kernel, kernel.T)
    assert np.allclose(kernel, kernel[::-1, ::-1])
    assert np.unravel_index(np.argmax(kernel), kernel.shape) == (5, 5)


def test_gaussian_kernel_of_size_one():
    assert np.array_equal(gaussian_kernel(1, 0.5), np.array([[1.0]]))


def test_gaussian_kernel_without_sigma_is_still_normalised():
    kernel = gaussian_kernel(5, 0)
    assert kernel.sum() == pytest.approx(1.0)
    assert kernel[2, 2] == kernel.max()


def test_gaussian_kernel_rejects_bad_size():
    with pytest.raises(ValueError):
        gaussian_kernel(0, 1.0)


def test_directional_kernel_horizontal():
    kernel = directional_kernel(7, 0.0)
    assert kernel.dtype == np.float32
    assert float(kernel.sum()) == pytest.approx(1.0, abs=1e-5)
    for row in kernel:
        assert np.allclose(row, row[0])
    assert kernel[3, 0] > kernel[2, 0] > kernel[1, 0]


def test_directional_kernel_vertical_is_transpose_of_horizontal():
    assert np.allclose(directional_kernel(7, 90.0), directional_kernel(7, 0.0).T, atol=1e-6)


def test_directional_kernel_rejects_bad_size():
    with pytest.raises(ValueError):
        directional_kernel(0, 45.0)


def test_filter2d_identity_kernel_keeps_image():
    image = np.arange(60, dtype=np.uint8).reshape(4, 5, 3)
    kernel = np.zeros((3, 3))
    kernel[1, 1] = 1.0
    assert np.array_equal(filter2d(image, kernel), image)


def test_filter2d_constant_image_stays_constant():
    image = np.full((6, 5, 3), 100, dtype=np.uint8)
    result = filter2d(image, gaussian_kernel(7, 1.0))
    assert result.dtype == np.uint8
    assert np.array_equal(result, image)


def test_filter2d_correlates_with_mirrored_border():
    image = np.arange(12, dtype=np.uint8).reshape(3, 4)
    kernel = np.zeros((3, 3))
    kernel[1, 2] = 1.0
    expected = np.array([[1, 2, 3, 2], [5, 6, 7, 6], [9, 10, 11, 10]], dtype=np.uint8)
    assert np.array_equal(filter2d(image, kernel), expected)


def test_filter2d_saturates_integers():
    image = np.full((2, 2), 200, dtype=np.uint8)
    assert np.array_equal(filter2d(image, np.array([[2.0]])), np.full((2, 2), 255, np.uint8))


def test_filter2d_rejects_bad_shapes():
    with pytest.raises(ValueError):
        filter2d(np.arange(5, dtype=np.uint8), np.ones((3, 3)))
    with pytest.raises(ValueError):
        filter2d(np.zeros((3, 3), np.uint8), np.ones(3))


def test_kernel_preview_stretches_to_full_range():
    preview = kernel_preview(gaussian_kernel(5, 1.0))
    assert preview.shape == (5, 5, 3)
    assert preview.dtype == np.uint8
    assert preview.max() == 255
    assert preview.min() == 0
    assert np.array_equal(preview[..., 0], preview[..., 2])


def test_kernel_preview_of_flat_kernel_is_black():
    preview = kernel_preview(np.full((3, 3), 0.25))
    assert not preview.any()


def test_blur_node_defaults_and_kernel():
    node = BlurNode(4)
    assert node.name == "Blur"
    assert node.radius == 5
    assert node.kernel().shape == (11, 11)
    node.directional_blur = True
    assert node.kernel().dtype == np.float32


def test_blur_node_without_input_has_no_output():
    node = BlurNode(4)
    node.process()
    assert node.get_output() is None
    assert node.dirty is False


def test_blur_node_smooths_checkerboard():
    board = (np.indices((16, 16)).sum(axis=0) % 2 * 255).astype(np.uint8)
    image = np.repeat(board[..., np.newaxis], 3, axis=2)
    node = BlurNode(4)
    node.radius = 2
    node.set_input(0, _Source(image))
    node.process()
    result = node.get_output()
    assert result.shape == image.shape
    assert result.std() < image.std()
    assert node.kernel_display.shape == (5, 5, 3)
    assert node.preview.shape == image.shape


def test_blur_node_clears_output_when_input_removed():
    image = np.full((4, 4, 3), 7, dtype=np.uint8)
    node = BlurNode(4)
    node.set_input(0, _Source(image))
    node.process()
    assert np.array_equal(node.get_output(), image)
    node.set_input(0, None)
    assert node.dirty is True
    node.process()
    assert node.get_output() is None