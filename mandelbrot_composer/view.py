"""Viewing window and pixel/complex-plane coordinate transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


class ConfigError(ValueError):
    """Raised when a configuration value is outside its valid domain."""


@dataclass(frozen=True)
class ViewConfig:
    """Pixel grid, iteration cap and the complex-plane window it samples."""

    width: int
    height: int
    max_iterations: int
    real_min: float
    real_max: float
    imag_min: float
    imag_max: float

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ConfigError("width and height must be greater than 0")
        if self.max_iterations < 1:
            raise ConfigError("max_iterations must be greater than 0")
        if self.real_min >= self.real_max:
            raise ConfigError("real_min must be less than real_max")
        if self.imag_min >= self.imag_max:
            raise ConfigError("imag_min must be less than imag_max")

    @classmethod
    def from_center(cls, width: int, height: int, max_iterations: int, center: complex, zoom: float) -> "ViewConfig":
        """Build a square window of half-width ``1 / zoom`` around ``center``.

        ``zoom`` must be positive.
        """

        half = 1.0 / zoom
        center = complex(center)
        return cls(
            width=width,
            height=height,
            max_iterations=max_iterations,
            real_min=center.real - half,
            real_max=center.real + half,
            imag_min=center.imag - half,
            imag_max=center.imag + half,
        )

    @property
    def bins_per_real_unit(self) -> float:
        return self.width / (self.real_max - self.real_min)

    @property
    def bins_per_imag_unit(self) -> float:
        return self.height / (self.imag_max - self.imag_min)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def shape(self) -> tuple[int, int]:
        """Array shape of grids sampled from this window, rows first."""
        return self.height, self.width


def pixel_to_complex(config: ViewConfig, x: int, y: int) -> complex:
    re = config.real_min + (x / config.bins_per_real_unit)
    im = config.imag_min + (y / config.bins_per_imag_unit)
    return complex(re, im)


def _to_bin(value: float) -> int:
    nearest = round(value)
    # forward-mapped coordinates land within rounding noise of their index
    if math.isclose(value, nearest, rel_tol=1e-9, abs_tol=1e-9):
        return int(nearest)
    return math.floor(value)


def complex_to_pixel(config: ViewConfig, c: complex) -> tuple[int, int]:
    """Return the ``(x, y)`` pixel whose bin contains ``c``."""

    c = complex(c)
    x = _to_bin((c.real - config.real_min) * config.bins_per_real_unit)
    y = _to_bin((c.imag - config.imag_min) * config.bins_per_imag_unit)
    return x, y


def coordinate_axes(config: ViewConfig) -> tuple[np.ndarray, np.ndarray]:
    """Real and imaginary sample coordinates for every column and row."""

    columns = np.arange(config.width, dtype=np.float64)
    rows = np.arange(config.height, dtype=np.float64)
    re_axis = np.float64(config.real_min) + columns / np.float64(config.bins_per_real_unit)
    im_axis = np.float64(config.imag_min) + rows / np.float64(config.bins_per_imag_unit)
    return re_axis, im_axis
