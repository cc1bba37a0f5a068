"""Spectral engine: magnitude spectrum, mel filter bank, dB conversion, DCT-II."""

import math
from typing import Optional

import numpy as np
import scipy.fft

# Natural-log mel scale (not the Slaney / log10 2595 variant)
MEL_SCALE = 1127.0


def to_mel(hz):
    return MEL_SCALE * np.log1p(np.asarray(hz, dtype=np.float64) / 700.0)


def to_hz(mel):
    return 700.0 * np.expm1(np.asarray(mel, dtype=np.float64) / MEL_SCALE)


def magnitude_spectrum(
    samples: np.ndarray,
    out: Optional[np.ndarray] = None,
    work: Optional[np.ndarray] = None,
) -> np.ndarray:
    """|DFT| of an arbitrary-length signal, full length N (not halved).

    Args:
        samples: Real input of any length.
        out: Optional float32 buffer of len(samples) for the result.
        work: Optional complex64 buffer of len(samples); it is overwritten.
    """
    n = len(samples)
    if out is None:
        out = np.empty(n, dtype=np.float32)
    if n == 0:
        return out
    if work is not None:
        work[:] = samples
        coefficients = scipy.fft.fft(work, overwrite_x=True)
    else:
        coefficients = scipy.fft.fft(samples.astype(np.complex64))
    np.abs(coefficients, out=out)
    return out


def mel_filter_weights(n_bins: int, sample_rate: float, channels: int) -> np.ndarray:
    """Triangular mel filters as a (channels, n_bins) matrix.

    Filters are spaced uniformly in mel between 0 Hz and Nyquist over a
    spectrum of n_bins bins covering [0, sample_rate). Each triangle is
    normalized by half of its bandwidth in Hz.
    """
    weights = np.zeros((channels, n_bins), dtype=np.float32)
    half = n_bins // 2
    if half == 0:
        return weights

    f_max = sample_rate / 2
    df = f_max / half
    d_mel = float(to_mel(f_max)) / (channels + 1)

    for n in range(channels):
        f_begin, f_center, f_end = to_hz(d_mel * np.arange(n, n + 3))
        i_begin = math.ceil(f_begin / df)
        i_center = int(round(f_center / df))
        i_end = min(math.floor(f_end / df), n_bins - 1)

        # Bins strictly after begin, up to and including end
        idx = np.arange(i_begin + 1, i_end + 1)
        if idx.size == 0:
            continue
        f = df * idx
        ramp = np.where(
            idx < i_center,
            (f - f_begin) / (f_center - f_begin),
            (f_end - f) / (f_end - f_center),
        )
        weights[n, idx] = ramp / ((f_end - f_begin) * 0.5)
    return weights


def mel_filter_bank(
    spectrum: np.ndarray,
    sample_rate: float,
    channels: int,
    out: Optional[np.ndarray] = None,
    weights: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Accumulate spectrum bins into `channels` mel energies.

    Pass precomputed weights (mel_filter_weights) to skip rebuilding the bank.
    """
    if weights is None:
        weights = mel_filter_weights(len(spectrum), sample_rate, channels)
    if out is None:
        out = np.empty(channels, dtype=np.float32)
    np.dot(weights, spectrum.astype(np.float32, copy=False), out=out)
    return out


def power_to_db(values: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """10 * log10(values); zero maps to -inf (rejected downstream, not clamped)."""
    if out is None:
        out = np.empty_like(values)
    with np.errstate(divide="ignore", invalid="ignore"):
        np.log10(values, out=out)
    out *= 10.0
    return out


def dct(spectrum: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Unnormalized DCT-II: out[i] = sum_j spectrum[j] * cos((j + 0.5) * i * pi / len)."""
    # scipy's type-II DCT carries a factor of 2
    cepstrum = scipy.fft.dct(spectrum, type=2)
    if out is None:
        out = np.empty(len(spectrum), dtype=np.float32)
    np.multiply(cepstrum, 0.5, out=out)
    return out
