"""Public API for layered Mandelbrot rendering."""

from .composer import Layer, compose, compose_layers, layer_weights
from .curves import ColorCurve, Linear, Modulo, Root, parse_curve, transfer, transfer_value
from .image import Image, write_image
from .renderer import NOT_ESCAPED, Plane, compute_cell, compute_plane, escape_time
from .view import ConfigError, ViewConfig, complex_to_pixel, coordinate_axes, pixel_to_complex

__all__ = [
    "ColorCurve",
    "ConfigError",
    "Image",
    "Layer",
    "Linear",
    "Modulo",
    "NOT_ESCAPED",
    "Plane",
    "Root",
    "ViewConfig",
    "complex_to_pixel",
    "compose",
    "compose_layers",
    "compute_cell",
    "compute_plane",
    "coordinate_axes",
    "escape_time",
    "layer_weights",
    "parse_curve",
    "transfer",
    "transfer_value",
    "write_image",
]
