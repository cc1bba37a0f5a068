"""Time-domain conditioning: anti-aliasing low-pass, downsampling, pre-emphasis,
Hamming window and peak normalization.

All functions work on 1-D float32 numpy arrays. The conditioning steps
(low-pass, pre-emphasis, window, normalize) modify their input in place and
return it so calls can be chained.
"""

from typing import Optional

import numpy as np
import scipy.signal

EPSILON = float(np.finfo(np.float32).eps)


def kernel_length(sample_rate: float, transition: float) -> int:
    """Odd FIR length for a transition band of ``transition`` Hz."""
    taps = int(round(3.1 / (transition / sample_rate)))
    if taps % 2 == 0:
        taps += 1
    return taps


def low_pass_kernel(
    sample_rate: float,
    cutoff: float,
    transition: float,
) -> Optional[np.ndarray]:
    """Design a windowed-sinc low-pass kernel.

    The passband edge sits at ``cutoff - transition`` so the transition band
    ends at ``cutoff``. Returns None when that edge is at or above the input
    Nyquist frequency: there is nothing left to suppress.
    """
    if transition <= 0:
        raise ValueError(f"transition must be positive, got {transition}")
    edge = cutoff - transition
    if edge <= 0:
        raise ValueError(f"cutoff {cutoff} Hz leaves no passband for transition {transition} Hz")
    if edge >= sample_rate / 2:
        return None
    taps = kernel_length(sample_rate, transition)
    return scipy.signal.firwin(taps, edge, window="hamming", fs=sample_rate).astype(np.float32)


def apply_fir(samples: np.ndarray, kernel: Optional[np.ndarray]) -> np.ndarray:
    """Causal (one-sided) convolution of samples with kernel, in place.

    Output sample i only combines input samples i, i-1, ... within kernel
    reach, so the result lags by half the kernel length.
    """
    if kernel is None or samples.size == 0:
        return samples
    samples[:] = scipy.signal.lfilter(kernel, 1.0, samples)
    return samples


def low_pass_filter(
    samples: np.ndarray,
    sample_rate: float,
    cutoff: float,
    transition: float,
) -> np.ndarray:
    """Suppress content above ``cutoff`` Hz before downsampling (in place)."""
    return apply_fir(samples, low_pass_kernel(sample_rate, cutoff, transition))


def resampled_length(n_samples: int, sample_rate: int, target_sample_rate: int) -> int:
    """Number of samples downsample() produces for an input of n_samples."""
    if sample_rate <= target_sample_rate:
        return n_samples
    if sample_rate % target_sample_rate == 0:
        return n_samples // (sample_rate // target_sample_rate)
    return int(round(n_samples * target_sample_rate / sample_rate))


def downsample(
    samples: np.ndarray,
    sample_rate: int,
    target_sample_rate: int,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Reduce samples from sample_rate to target_sample_rate.

    - sample_rate <= target: copied unchanged (no upsampling).
    - integer ratio r: every r-th sample, floor(len / r) samples.
    - otherwise: linear interpolation at fractional source positions,
      round(len / ratio) samples.

    Args:
        samples: Source signal.
        sample_rate: Source rate in Hz.
        target_sample_rate: Desired rate in Hz.
        out: Optional buffer of at least resampled_length() samples; the
            returned array is a view into it.

    Returns:
        float32 array of resampled_length() samples.
    """
    n_in = len(samples)
    n_out = resampled_length(n_in, sample_rate, target_sample_rate)
    if out is None:
        out = np.empty(n_out, dtype=np.float32)
    else:
        if len(out) < n_out:
            raise ValueError(f"out holds {len(out)} samples, {n_out} required")
        out = out[:n_out]
    if n_out == 0:
        return out

    if sample_rate <= target_sample_rate:
        out[:] = samples
    elif sample_rate % target_sample_rate == 0:
        skip = sample_rate // target_sample_rate
        out[:] = samples[: n_out * skip : skip]
    else:
        ratio = sample_rate / target_sample_rate
        position = np.arange(n_out) * ratio
        i0 = np.minimum(np.floor(position).astype(np.intp), n_in - 1)
        i1 = np.minimum(i0 + 1, n_in - 1)
        t = (position - i0).astype(np.float32)
        out[:] = samples[i0] * (1.0 - t) + samples[i1] * t
    return out


def pre_emphasis(samples: np.ndarray, coeff: float = 0.97) -> np.ndarray:
    """samples[i] -= coeff * samples[i - 1] for i >= 1, in place.

    Every difference uses the original predecessor: the product on the right
    is materialized before the subtraction writes back.
    """
    if samples.size > 1:
        samples[1:] -= coeff * samples[:-1]
    return samples


def hamming(samples: np.ndarray, window: Optional[np.ndarray] = None) -> np.ndarray:
    """Apply 0.54 - 0.46 * cos(2*pi*i / (N - 1)) in place.

    A single-sample frame gets unit weight.
    """
    if window is None:
        window = np.hamming(len(samples))
    samples *= window
    return samples


def normalize(samples: np.ndarray, peak: float = 1.0) -> np.ndarray:
    """Scale so max(|samples|) == peak; near-silent input is left untouched."""
    if samples.size == 0:
        return samples
    m = float(np.max(np.abs(samples)))
    if m > EPSILON:
        samples *= peak / m
    return samples
