"""Blend the development cover over icon images.

The blend is deliberately not standard "over" compositing. The cover's alpha
is subtracted from the source's alpha before weighting, and the weights are
not re-normalized, which punches the cover shape out of the icon:

    source_alpha = source.a - cover.a
    rgb          = source.rgb * source_alpha + cover.rgb * cover_alpha
    alpha        = min(1, source_alpha + cover_alpha)

Color channels may leave ``[0, 1]``; they are clamped when written back into
the 8-bit output image.
"""
from __future__ import annotations

from typing import Iterator, Tuple

from PIL import Image

from .utils import to_channel_byte

_ALPHA_EPSILON = 1e-6
_SCALE = 1.0 / 255.0

Pixel = Tuple[int, int, int, int]


def combine(source: Image.Image, cover: Image.Image) -> Image.Image:
    """Return a new image with ``cover`` blended over ``source``.

    Both images must have the same size; neither is modified.
    """

    if source.size != cover.size:
        raise ValueError(
            f"Cover size {cover.size[0]}x{cover.size[1]} does not match "
            f"source size {source.size[0]}x{source.size[1]}"
        )

    source_pixels = _rgba_pixels(source)
    cover_pixels = _rgba_pixels(cover)
    combined = bytearray()
    for s, c in zip(source_pixels, cover_pixels):
        combined.extend(_blend_pixel(s, c))

    return Image.frombytes("RGBA", source.size, bytes(combined))


def fit_cover(cover: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Resample the cover to ``size``; always returns a new image."""
    rgba = cover if cover.mode == "RGBA" else cover.convert("RGBA")
    return rgba.resize(size, Image.Resampling.BILINEAR)


def combine_with_cover(source: Image.Image, cover: Image.Image) -> Image.Image:
    """Fit ``cover`` to ``source`` and blend it; the fitted copy is closed afterwards."""
    with fit_cover(cover, source.size) as fitted:
        return combine(source, fitted)


def _rgba_pixels(image: Image.Image) -> Iterator[Pixel]:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    data = image.tobytes()
    return zip(data[0::4], data[1::4], data[2::4], data[3::4])


def _blend_pixel(source: Pixel, cover: Pixel) -> Pixel:
    cover_alpha = cover[3] * _SCALE
    source_alpha = source[3] * _SCALE - cover_alpha

    r = source[0] * _SCALE * source_alpha + cover[0] * _SCALE * cover_alpha
    g = source[1] * _SCALE * source_alpha + cover[1] * _SCALE * cover_alpha
    b = source[2] * _SCALE * source_alpha + cover[2] * _SCALE * cover_alpha
    a = min(1.0, source_alpha + cover_alpha)
    if abs(source_alpha) < _ALPHA_EPSILON and abs(cover_alpha) < _ALPHA_EPSILON:
        a = 0.0

    return (to_channel_byte(r), to_channel_byte(g), to_channel_byte(b), to_channel_byte(a))
