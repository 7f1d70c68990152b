import os
import sys
import time
import warnings
from argparse import ArgumentParser, ArgumentTypeError
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from mandelbrot_composer import (
    ConfigError,
    Layer,
    ViewConfig,
    compose,
    compose_layers,
    compute_plane,
    parse_curve,
    write_image,
)

DEVICE = '/CPU:0'

DEFAULT_LAYERS = (
    "linear:1,0,0:3",
    "root=3:0,1,0:3",
    "modulo=10:0,0,1:1",
)


def curve_arg(text):
    try:
        return parse_curve(text)
    except ConfigError as exc:
        raise ArgumentTypeError(str(exc)) from exc


def layer_arg(text):
    """Parse ``CURVE:R,G,B:WEIGHT`` into ``(curve, multiplier, weight)``."""

    parts = text.split(":")
    if len(parts) != 3:
        raise ArgumentTypeError(f"layer '{text}' must look like CURVE:R,G,B:WEIGHT")
    curve_text, multiplier_text, weight_text = parts
    curve = curve_arg(curve_text)
    try:
        multiplier = tuple(float(value) for value in multiplier_text.split(","))
    except ValueError as exc:
        raise ArgumentTypeError(f"layer '{text}' has a non-numeric color multiplier") from exc
    if len(multiplier) != 3:
        raise ArgumentTypeError(f"layer '{text}' needs exactly three color multipliers")
    try:
        weight = int(weight_text)
    except ValueError as exc:
        raise ArgumentTypeError(f"layer '{text}' has a non-integer weight") from exc
    if weight < 1:
        raise ArgumentTypeError(f"layer '{text}' must have a weight of at least 1")
    return curve, multiplier, weight


def build_parser():
    parser = ArgumentParser(description='Render a layered Mandelbrot image.')

    parser.add_argument('--width', type=int,
                        dest='width', help='number of pixel columns',
                        metavar='WIDTH', default=1000)

    parser.add_argument('--height', type=int,
                        dest='height', help='number of pixel rows',
                        metavar='HEIGHT', default=1000)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of times to iterate z*z + c per pixel',
                        metavar='MAX_ITERATIONS', default=100)

    parser.add_argument('--center-re', type=float,
                        dest='center_re', help='real part of the window center',
                        metavar='CENTER_RE', default=-0.5)

    parser.add_argument('--center-im', type=float,
                        dest='center_im', help='imaginary part of the window center',
                        metavar='CENTER_IM', default=0.0)

    parser.add_argument('--zoom', type=float,
                        dest='zoom', help='zoom factor; the window spans 2/ZOOM on each axis',
                        metavar='ZOOM', default=1.0)

    parser.add_argument('--bounds', type=float, nargs=4,
                        dest='bounds', help='explicit window, overrides --center-re/--center-im/--zoom',
                        metavar=('REAL_MIN', 'REAL_MAX', 'IMAG_MIN', 'IMAG_MAX'))

    parser.add_argument('--layer', dest='layers', action='append', type=layer_arg, metavar='LAYER',
                        help='Layer as CURVE:R,G,B:WEIGHT, e.g. "root=3:0,1,0:3". May be repeated. '
                             'CURVE is linear, root=<exponent> or modulo=<period>.')

    parser.add_argument('--mono', dest='mono', type=curve_arg, metavar='CURVE',
                        help='Render a single grayscale layer with CURVE instead of blending layers.')

    parser.add_argument('--output', dest='output', type=str, default='mandelbrot.png',
                        help='Destination image file.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format of the output. Can be any extension supported by Pillow. '
                                            'Default: taken from --output, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_view(opt, parser):
    try:
        if opt.bounds is not None:
            real_min, real_max, imag_min, imag_max = opt.bounds
            return ViewConfig(
                width=opt.width,
                height=opt.height,
                max_iterations=opt.max_iterations,
                real_min=real_min,
                real_max=real_max,
                imag_min=imag_min,
                imag_max=imag_max,
            )
        if opt.zoom <= 0:
            parser.error("--zoom must be positive.")
        return ViewConfig.from_center(
            opt.width,
            opt.height,
            opt.max_iterations,
            complex(opt.center_re, opt.center_im),
            opt.zoom,
        )
    except ConfigError as exc:
        parser.error(str(exc))


def render(opt, parser):
    if opt.mono is not None and opt.layers:
        parser.error("--mono cannot be combined with --layer.")

    config = resolve_view(opt, parser)
    log("TensorFlow version: %s" % tf.__version__)
    log("Window re [%r, %r] im [%r, %r], %dx%d, %d iterations" % (
        config.real_min, config.real_max, config.imag_min, config.imag_max,
        config.width, config.height, config.max_iterations))

    start = time.perf_counter()
    plane = compute_plane(config, device=DEVICE)
    log("Plane computed in %.3fs" % (time.perf_counter() - start))

    if opt.mono is not None:
        return compose(plane, opt.mono)

    specs = opt.layers or [layer_arg(text) for text in DEFAULT_LAYERS]
    layers = [
        Layer(plane=plane, curve=curve, color_multiplier=multiplier, weight=weight)
        for curve, multiplier, weight in specs
    ]
    start = time.perf_counter()
    image = compose_layers(layers)
    log("Composed %d layers in %.3fs" % (len(layers), time.perf_counter() - start))
    return image


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    image = render(opt, parser)
    output_path = write_image(image, Path(opt.output).expanduser(), opt.format)
    log("Wrote %s" % output_path)
    return output_path


if __name__ == '__main__':
    main()
