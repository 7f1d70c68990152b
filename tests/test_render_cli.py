from argparse import ArgumentTypeError

import PIL.Image
import pytest

import render
from mandelbrot_composer import Linear, Modulo, Root


def test_layer_arg():
    assert render.layer_arg("root=3:0,1,0:3") == (Root(3.0), (0.0, 1.0, 0.0), 3)
    assert render.layer_arg("linear:1,0.5,0.25:1") == (Linear(), (1.0, 0.5, 0.25), 1)


@pytest.mark.parametrize(
    "text",
    ["linear", "linear:1,0,0", "linear:1,0:1", "linear:1,a,0:1", "linear:1,0,0:x", "linear:1,0,0:0", "cubic:1,0,0:1"],
)
def test_layer_arg_rejects(text):
    with pytest.raises(ArgumentTypeError):
        render.layer_arg(text)


def test_default_layers_parse():
    parsed = [render.layer_arg(text) for text in render.DEFAULT_LAYERS]
    assert [curve for curve, _, _ in parsed] == [Linear(), Root(3.0), Modulo(10)]
    assert [weight for _, _, weight in parsed] == [3, 3, 1]


def test_main_writes_layered_image(tmp_path):
    output = tmp_path / "layers.png"
    path = render.main(["--width", "40", "--height", "30", "--output", str(output)])
    assert path == output
    with PIL.Image.open(output) as saved:
        assert saved.size == (40, 30)
        assert saved.mode == "RGB"


def test_main_mono_with_bounds(tmp_path):
    output = tmp_path / "mono.png"
    render.main([
        "--width", "100", "--height", "100",
        "--bounds", "-1.5", "0.5", "-1.0", "1.0",
        "--mono", "linear",
        "--output", str(output),
    ])
    with PIL.Image.open(output) as saved:
        # the origin never escapes
        assert saved.getpixel((75, 50)) == (0, 0, 0)
        r, g, b = saved.getpixel((0, 0))
        assert r == g == b


@pytest.mark.parametrize(
    "args",
    [
        ["--mono", "linear", "--layer", "linear:1,0,0:1"],
        ["--bounds", "1.0", "0.0", "-1.0", "1.0"],
        ["--width", "0"],
        ["--zoom", "0"],
        ["--mono", "root=-1"],
    ],
)
def test_invalid_arguments_exit(tmp_path, args):
    with pytest.raises(SystemExit):
        render.main([*args, "--output", str(tmp_path / "unused.png")])
