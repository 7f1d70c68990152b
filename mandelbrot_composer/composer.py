"""Blend one or more escape-time planes into an RGB image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .curves import ColorCurve, transfer
from .image import Image
from .renderer import Plane
from .view import ConfigError, ViewConfig


@dataclass(frozen=True)
class Layer:
    """One weighted, tinted color-curve contribution to a composed image."""

    plane: Plane
    curve: ColorCurve
    color_multiplier: tuple[float, float, float] = (1.0, 1.0, 1.0)
    weight: int = 1

    def __post_init__(self) -> None:
        if self.weight < 1:
            raise ConfigError("layer weight must be at least 1")
        multiplier = tuple(float(m) for m in self.color_multiplier)
        if len(multiplier) != 3:
            raise ConfigError("color_multiplier must have exactly three components")
        object.__setattr__(self, "color_multiplier", multiplier)

    @property
    def config(self) -> ViewConfig:
        return self.plane.config

    def intensity(self) -> np.ndarray:
        return transfer(self.curve, self.plane.iterations, self.config.max_iterations)


def layer_weights(layers: Sequence[Layer]) -> list[float]:
    """Each layer's share of the summed weight."""

    total_weight = sum(layer.weight for layer in layers)
    return [layer.weight / total_weight for layer in layers]


def compose(plane: Plane, curve: ColorCurve) -> Image:
    """Grayscale image with all three channels set to the curve intensity."""

    intensity = transfer(curve, plane.iterations, plane.config.max_iterations)
    return Image(np.stack([intensity, intensity, intensity], axis=-1))


def _truncate_to_byte(values: np.ndarray) -> np.ndarray:
    return np.clip(np.trunc(values), 0, 255).astype(np.uint8)


def compose_layers(layers: Sequence[Layer]) -> Image:
    """Weighted sum of every layer's tinted intensity.

    Each layer's per-channel contribution is truncated to a byte before it is
    added, and the sum wraps around at 256. All planes must share the first
    layer's dimensions.
    """

    layers = list(layers)
    if not layers:
        raise ValueError("compose_layers requires at least one layer")

    height, width = layers[0].config.shape
    pixels = np.zeros((height, width, 3), dtype=np.uint8)

    for layer, weight in zip(layers, layer_weights(layers)):
        intensity = layer.intensity().astype(np.float64)
        for channel, multiplier in enumerate(layer.color_multiplier):
            contribution = _truncate_to_byte(intensity * multiplier * weight)
            pixels[..., channel] += contribution

    return Image(pixels)
