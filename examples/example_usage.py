#!/usr/bin/env python3
"""
Example usage of raster-codec

Builds a few rasters the way a tile assembler would hand them over (raw bytes
plus tags), decodes them for display and analysis, and round-trips an image
through the encoder.
"""

import numpy as np

from raster_codec import (
    Endian,
    ImageKind,
    PhotometricInterpretation,
    PixelImage,
    Raster,
    SampleFormat,
    compare_rasters,
    configure_logging,
    display_comparison_table,
)


def create_reflectance_raster(width=256, height=256):
    """Single-band float32 raster, big-endian, in the tone-mapped value range"""
    x = np.linspace(0, 4 * np.pi, width)
    y = np.linspace(0, 4 * np.pi, height)
    X, Y = np.meshgrid(x, y)
    values = (0.037 * np.sin(X) * np.cos(Y)).astype(">f4")

    return Raster(
        (width, height),
        values.tobytes(),
        [32],
        PhotometricInterpretation.BLACK_IS_ZERO,
        [SampleFormat.FLOAT],
        [],
        Endian.BIG,
    )


def create_temperature_raster(width=64, height=64):
    """Single-band int16 raster in tenths of a unit"""
    values = np.linspace(-500, 3000, width * height).astype("<i2")
    return Raster(
        (width, height),
        values.tobytes(),
        [16],
        PhotometricInterpretation.BLACK_IS_ZERO,
        [SampleFormat.SIGNED],
        [],
        Endian.LITTLE,
    )


if __name__ == "__main__":
    logger = configure_logging(verbose=False)

    reflectance = create_reflectance_raster()
    logger.info(f"Built {reflectance}")

    # Analysis view
    data = reflectance.to_f32_array().reshape(reflectance.height, reflectance.width)
    print(f"Reflectance range: {data.min():.4f} - {data.max():.4f}")

    # Display view
    preview = reflectance.to_image()
    preview.save("reflectance_preview.png")
    print(f"Saved {preview!r} to reflectance_preview.png")

    temperature = create_temperature_raster()
    print(f"Temperature pixel (0, 0): {temperature.pixel_rgba(0, 0)}")
    print(f"Temperature pixel (63, 63): {temperature.pixel_rgba(63, 63)}")

    # Round trip through the encoder
    rgb = PixelImage.from_raw(
        ImageKind.RGB16, 32, 32, np.arange(32 * 32 * 3, dtype=np.uint16) * 20
    )
    encoded = Raster.from_image(rgb)
    decoded = Raster.from_image(encoded.to_image())
    display_comparison_table(compare_rasters(encoded, decoded))
