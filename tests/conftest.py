"""
Shared fixtures for raster-codec tests
"""

import numpy as np
import pytest

from raster_codec import Endian, PhotometricInterpretation, Raster, SampleFormat


@pytest.fixture
def make_raster():
    """Factory building a Raster with sensible defaults for the optional tags"""

    def _make(
        dimensions,
        buffer,
        bits_per_sample,
        sample_format=None,
        interpretation=PhotometricInterpretation.BLACK_IS_ZERO,
        extra_samples=(),
        endian=Endian.LITTLE,
    ):
        if sample_format is None:
            sample_format = [SampleFormat.UNSIGNED] * len(bits_per_sample)
        return Raster(
            dimensions,
            buffer,
            bits_per_sample,
            interpretation,
            sample_format,
            extra_samples,
            endian,
        )

    return _make


@pytest.fixture
def rng():
    """Seeded random generator so failures are reproducible"""
    return np.random.default_rng(1234)
