"""Transfer functions from iteration counts to channel intensities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from .renderer import NOT_ESCAPED
from .view import ConfigError


@dataclass(frozen=True)
class Linear:
    """Intensity proportional to the escape iteration."""


@dataclass(frozen=True)
class Root:
    """Root-compressed escape iteration, brightening early escapes."""

    exponent: float

    def __post_init__(self) -> None:
        if not self.exponent > 0:
            raise ConfigError("root exponent must be positive")


@dataclass(frozen=True)
class Modulo:
    """Escape iteration folded into bands of ``period`` iterations."""

    period: int

    def __post_init__(self) -> None:
        if self.period < 1:
            raise ConfigError("modulo period must be greater than 0")


ColorCurve = Union[Linear, Root, Modulo]


def parse_curve(text: str) -> ColorCurve:
    """Parse ``linear``, ``root=<exponent>`` or ``modulo=<period>``."""

    name, _, value = text.strip().lower().partition("=")
    try:
        if name == "linear" and not value:
            return Linear()
        if name == "root" and value:
            return Root(float(value))
        if name == "modulo" and value:
            return Modulo(int(value))
    except ValueError as exc:
        raise ConfigError(f"invalid color curve '{text}': {exc}") from exc
    raise ConfigError(f"unknown color curve '{text}'; expected linear, root=<exponent> or modulo=<period>")


def _to_byte(value: float) -> int:
    return min(max(int(value), 0), 255)


def transfer_value(curve: ColorCurve, iterations: Optional[int], max_iterations: int) -> int:
    """Intensity in ``[0, 255]`` for a single cell; ``None`` means it never escaped."""

    if iterations is None or iterations == NOT_ESCAPED:
        return 0
    if isinstance(curve, Linear):
        norm = iterations / max_iterations
        return _to_byte(norm * 255.0)
    if isinstance(curve, Root):
        norm = iterations / max_iterations
        return _to_byte(norm ** (1.0 / curve.exponent) * 255.0)
    if isinstance(curve, Modulo):
        norm = (iterations % curve.period) / curve.period
        return _to_byte(norm * 255.0)
    raise TypeError(f"unsupported color curve {curve!r}")


def transfer(curve: ColorCurve, iterations: np.ndarray, max_iterations: int) -> np.ndarray:
    """Apply :func:`transfer_value` to a grid of iteration counts.

    Each distinct count is evaluated once and the results are scattered back,
    so the grid gets exactly the scalar bytes.
    """

    counts = np.asarray(iterations, dtype=np.int64)
    values, inverse = np.unique(counts, return_inverse=True)
    table = np.array([transfer_value(curve, int(value), max_iterations) for value in values], dtype=np.uint8)
    return table[inverse].reshape(counts.shape)
