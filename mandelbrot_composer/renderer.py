"""Escape-time engine producing iteration-count planes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

from .view import ViewConfig, coordinate_axes, pixel_to_complex

BOUND = 2.0
NOT_ESCAPED = -1


@dataclass(frozen=True)
class Plane:
    """Iteration counts for every pixel of a view.

    ``iterations`` has shape ``(height, width)``; cells that stayed bounded for
    all ``max_iterations`` hold ``NOT_ESCAPED``.
    """

    iterations: np.ndarray
    config: ViewConfig

    def __post_init__(self) -> None:
        iterations = np.array(self.iterations, dtype=np.int32, copy=True)
        iterations.setflags(write=False)
        object.__setattr__(self, "iterations", iterations)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def escaped(self) -> np.ndarray:
        return self.iterations != NOT_ESCAPED

    def get_bin(self, x: int, y: int) -> Optional[int]:
        value = int(self.iterations[y, x])
        return None if value == NOT_ESCAPED else value


def escape_time(c: complex, max_iterations: int) -> Optional[int]:
    """Index of the iteration at which ``z <- z*z + c`` leaves the box ``|re|, |im| <= 2``."""

    c = complex(c)
    cr, ci = c.real, c.imag
    zr = zi = 0.0
    for i in range(max_iterations):
        zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
        if zr > BOUND or zr < -BOUND or zi > BOUND or zi < -BOUND:
            return i
    return None


def compute_cell(config: ViewConfig, x: int, y: int) -> Optional[int]:
    return escape_time(pixel_to_complex(config, x, y), config.max_iterations)


@tf.function
def _escape_step(
    i: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance every still-bounded point by one iteration."""

    zr_next = zr * zr - zi * zi + cr
    zi_next = zr * zi + zi * zr + ci
    zr = tf.where(active, zr_next, zr)
    zi = tf.where(active, zi_next, zi)
    bound = tf.constant(BOUND, dtype=zr.dtype)
    outside = tf.logical_or(tf.abs(zr) > bound, tf.abs(zi) > bound)
    escaped = tf.logical_and(active, outside)
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    return zr, zi, counts, active


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate the whole grid with a TensorFlow while loop."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.fill(tf.shape(cr), tf.constant(NOT_ESCAPED, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, zr, zi, counts, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, zr, zi, counts, active):
        zr, zi, counts, active = _escape_step(i, zr, zi, cr, ci, counts, active)
        return i + 1, zr, zi, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, zr, zi, counts, active))
    return counts


def compute_plane(config: ViewConfig, *, device: Optional[str] = None) -> Plane:
    """Compute the escape-time plane for ``config``."""

    re_axis, im_axis = coordinate_axes(config)
    max_iterations = tf.constant(config.max_iterations, dtype=tf.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        re_tf = tf.convert_to_tensor(re_axis, dtype=tf.float64)
        im_tf = tf.convert_to_tensor(im_axis, dtype=tf.float64)
        cr, ci = tf.meshgrid(re_tf, im_tf)
        counts = _escape_run(cr, ci, max_iterations)

    return Plane(iterations=counts.numpy(), config=config)
