import numpy as np
import PIL.Image
import pytest

from mandelbrot_composer import Image, Linear, compose, write_image


def _gradient_image():
    pixels = np.zeros((2, 3, 3), dtype=np.uint8)
    pixels[..., 0] = [[0, 10, 20], [30, 40, 50]]
    pixels[..., 1] = 100
    pixels[1, 2] = (255, 128, 1)
    return Image(pixels)


def test_image_accessors():
    image = _gradient_image()
    assert image.width == 3
    assert image.height == 2
    assert image.get_pixel(1, 0) == (10, 100, 0)
    assert image.get_pixel(2, 1) == (255, 128, 1)


def test_image_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Image(np.zeros((4, 4), dtype=np.uint8))


def test_image_is_read_only():
    image = _gradient_image()
    with pytest.raises(ValueError):
        image.pixels[0, 0, 0] = 1


def test_write_png_round_trip(tmp_path):
    image = _gradient_image()
    path = write_image(image, tmp_path / "nested" / "out.png")
    assert path.is_file()
    with PIL.Image.open(path) as saved:
        assert saved.mode == "RGB"
        assert saved.size == (3, 2)
        np.testing.assert_array_equal(np.asarray(saved), image.pixels)


def test_write_uses_explicit_format(tmp_path):
    path = write_image(_gradient_image(), tmp_path / "frame", "jpg")
    with PIL.Image.open(path) as saved:
        assert saved.format == "JPEG"


def test_write_defaults_to_png_without_suffix(tmp_path):
    path = write_image(_gradient_image(), tmp_path / "frame")
    with PIL.Image.open(path) as saved:
        assert saved.format == "PNG"


def test_composed_plane_can_be_written(tmp_path, strip_plane):
    path = write_image(compose(strip_plane, Linear()), tmp_path / "strip.png")
    with PIL.Image.open(path) as saved:
        assert saved.getpixel((2, 0)) == (127, 127, 127)
