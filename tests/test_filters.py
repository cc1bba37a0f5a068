"""Unit tests for time-domain conditioning (low-pass, downsample, emphasis, window, normalize)."""

from __future__ import annotations

import unittest

import numpy as np

from mfcc_profile.dsp.filters import (
    downsample,
    hamming,
    kernel_length,
    low_pass_filter,
    low_pass_kernel,
    normalize,
    pre_emphasis,
    resampled_length,
)


def _sine(freq: float, sample_rate: int, n: int) -> np.ndarray:
    t = np.arange(n) / sample_rate
    return np.sin(2 * np.pi * freq * t).astype(np.float32)


def _rms(x: np.ndarray) -> float:
    return float(np.sqrt(np.mean(x.astype(np.float64) ** 2)))


class TestNormalize(unittest.TestCase):
    def test_scales_to_peak(self) -> None:
        rng = np.random.default_rng(0)
        x = (rng.standard_normal(512) * 0.1).astype(np.float32)
        normalize(x, 0.5)
        self.assertAlmostEqual(float(np.max(np.abs(x))), 0.5, places=5)

    def test_silence_unchanged(self) -> None:
        x = np.zeros(64, dtype=np.float32)
        normalize(x, 1.0)
        np.testing.assert_array_equal(x, np.zeros(64, dtype=np.float32))

    def test_below_epsilon_unchanged(self) -> None:
        x = np.full(8, 1e-9, dtype=np.float32)
        normalize(x)
        np.testing.assert_array_equal(x, np.full(8, 1e-9, dtype=np.float32))


class TestDownsample(unittest.TestCase):
    def setUp(self) -> None:
        self.rng = np.random.default_rng(1)

    def test_identity(self) -> None:
        x = self.rng.standard_normal(1000).astype(np.float32)
        out = downsample(x, 16_000, 16_000)
        np.testing.assert_array_equal(out, x)

    def test_no_upsampling(self) -> None:
        x = self.rng.standard_normal(300).astype(np.float32)
        out = downsample(x, 8_000, 16_000)
        np.testing.assert_array_equal(out, x)

    def test_integer_ratio_decimates(self) -> None:
        x = self.rng.standard_normal(1001).astype(np.float32)
        out = downsample(x, 32_000, 16_000)
        self.assertEqual(len(out), 500)
        np.testing.assert_array_equal(out, x[0:1000:2])

    def test_fractional_ratio_length(self) -> None:
        self.assertEqual(resampled_length(1024, 44_100, 16_000), 372)
        out = downsample(np.zeros(1024, dtype=np.float32), 44_100, 16_000)
        self.assertEqual(len(out), 372)

    def test_fractional_ratio_interpolates_linearly(self) -> None:
        """A ramp stays a ramp: value == fractional source position."""
        x = np.arange(1024, dtype=np.float32)
        out = downsample(x, 44_100, 16_000)
        expected = np.arange(len(out)) * (44_100 / 16_000)
        np.testing.assert_allclose(out, expected, rtol=1e-5, atol=1e-3)

    def test_writes_into_out_buffer(self) -> None:
        x = self.rng.standard_normal(64).astype(np.float32)
        buf = np.zeros(100, dtype=np.float32)
        out = downsample(x, 48_000, 16_000, out=buf)
        self.assertEqual(len(out), 21)
        np.testing.assert_array_equal(buf[:21], x[0:63:3])

    def test_out_buffer_too_small(self) -> None:
        with self.assertRaises(ValueError):
            downsample(np.zeros(64, dtype=np.float32), 16_000, 16_000, out=np.zeros(10, dtype=np.float32))


class TestPreEmphasis(unittest.TestCase):
    def test_constant_sequence(self) -> None:
        x = np.full(8, 0.5, dtype=np.float32)
        pre_emphasis(x, 0.97)
        self.assertAlmostEqual(float(x[0]), 0.5, places=6)
        np.testing.assert_allclose(x[1:], 0.5 * (1 - 0.97), rtol=1e-4)

    def test_uses_original_predecessor(self) -> None:
        """Same result as iterating from the last index down to 1."""
        rng = np.random.default_rng(2)
        x = rng.standard_normal(50).astype(np.float32)
        expected = x.copy()
        for i in range(len(expected) - 1, 0, -1):
            expected[i] -= np.float32(0.97) * expected[i - 1]
        pre_emphasis(x, 0.97)
        np.testing.assert_allclose(x, expected, rtol=1e-5, atol=1e-6)

    def test_single_sample(self) -> None:
        x = np.array([0.3], dtype=np.float32)
        pre_emphasis(x)
        self.assertAlmostEqual(float(x[0]), 0.3, places=6)


class TestHamming(unittest.TestCase):
    def test_edges_and_center(self) -> None:
        x = np.ones(9, dtype=np.float32)
        hamming(x)
        self.assertAlmostEqual(float(x[0]), 0.08, places=5)
        self.assertAlmostEqual(float(x[-1]), 0.08, places=5)
        self.assertAlmostEqual(float(x[4]), 1.0, places=5)

    def test_single_sample_unit_weight(self) -> None:
        x = np.array([0.7], dtype=np.float32)
        hamming(x)
        self.assertAlmostEqual(float(x[0]), 0.7, places=6)


class TestLowPass(unittest.TestCase):
    def test_kernel_length_is_odd(self) -> None:
        self.assertEqual(kernel_length(48_000, 500.0), 299)
        self.assertEqual(kernel_length(16_000, 500.0), 99)
        self.assertEqual(kernel_length(44_100, 500.0), 273)

    def test_pass_through_below_nyquist(self) -> None:
        """No kernel when the passband edge is above the input Nyquist."""
        self.assertIsNone(low_pass_kernel(8_000, 8_000, 500.0))

    def test_invalid_passband(self) -> None:
        with self.assertRaises(ValueError):
            low_pass_kernel(16_000, 400.0, 500.0)

    def test_attenuates_above_cutoff(self) -> None:
        sr = 48_000
        taps = kernel_length(sr, 500.0)
        high = _sine(20_000, sr, 4800)
        low = _sine(1_000, sr, 4800)
        high_rms = _rms(high[taps:])
        low_rms = _rms(low[taps:])
        low_pass_filter(high, sr, 8_000, 500.0)
        low_pass_filter(low, sr, 8_000, 500.0)
        self.assertLess(_rms(high[taps:]), 0.01 * high_rms)
        self.assertGreater(_rms(low[taps:]), 0.9 * low_rms)

    def test_causal(self) -> None:
        """Output before an impulse stays zero."""
        x = np.zeros(200, dtype=np.float32)
        x[10] = 1.0
        low_pass_filter(x, 16_000, 4_000, 500.0)
        np.testing.assert_array_equal(x[:10], np.zeros(10, dtype=np.float32))
        self.assertNotEqual(float(np.abs(x[10:]).sum()), 0.0)


if __name__ == "__main__":
    unittest.main()
