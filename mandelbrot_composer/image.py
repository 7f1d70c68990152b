"""RGB image grid and the Pillow-backed image sink."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image


@dataclass(frozen=True)
class Image:
    """An 8-bit RGB raster of shape ``(height, width, 3)``."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"expected an array of shape (height, width, 3), got {pixels.shape}")
        pixels = pixels.astype(np.uint8, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def to_pil(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(np.ascontiguousarray(self.pixels))


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_image(image: Image, output_path: Union[str, Path], image_format: Optional[str] = None) -> Path:
    """Write ``image`` to ``output_path``; the format defaults to the file suffix, then PNG."""

    output_path = Path(output_path)
    if image_format is None:
        image_format = output_path.suffix.lstrip(".") or "png"
    image_format = image_format.lower().lstrip(".")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.to_pil().save(str(output_path), format=_pil_format_name(image_format))
    return output_path
