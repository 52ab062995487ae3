"""Discrete Fourier transforms of sampled time series."""

from __future__ import annotations

import math
import sys
from os import PathLike
from pathlib import Path
from typing import Sequence

import numpy as np


def _parse_f32(text: str) -> np.float32:
    """Parse a decimal literal into a single-precision float."""
    if "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    with np.errstate(over="ignore"):
        return np.float32(float(text))


def _format_f32(value: np.float32) -> str:
    """Shortest positional rendering of a single-precision float."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return np.format_float_positional(np.float32(value), unique=True, trim="-")


def _format_complex(value: complex) -> str:
    real = np.float32(value.real)
    imag = np.float32(value.imag)
    if imag < 0:
        imag_text = "-" + _format_f32(-imag)
    else:
        imag_text = "+" + _format_f32(imag)
    return f"{_format_f32(real)}{imag_text}i"


def fft(
    input_path: str | PathLike[str],
    output_path: str | PathLike[str] | None = None,
) -> list[complex]:
    """Transform the numbers in a file (one per line) and write the spectrum.

    The spectrum goes to ``output_path`` when given, otherwise to stdout.
    Returns the computed single-precision spectrum.
    """
    text = Path(input_path).read_text()
    values = [_parse_f32(line.strip()) for line in text.split("\n") if line.strip()]

    if values:
        spectrum = np.fft.fft(np.asarray(values, dtype=np.float64)).astype(np.complex64)
        result = [complex(z) for z in spectrum]
    else:
        result = []

    rendered = "".join(f"{_format_complex(z)}\n" for z in result)

    if output_path is None:
        sys.stdout.write(rendered)
    else:
        Path(output_path).write_text(rendered)
        print(f"Wrote to {output_path}")

    return result


def compute_fourier_transform(
    data: Sequence[float],
) -> tuple[list[float], list[float], list[float]]:
    """Return the cosine and sine coefficients and the power of each frequency.

    Coefficients are obtained with a second-order recurrence and are
    normalised by the number of samples.
    """
    samples = np.asarray(data, dtype=np.float64)
    n = samples.size
    if n == 0:
        return [], [], []

    theta = 2.0 * np.pi * np.arange(n, dtype=np.float64) / n
    cos_t = np.cos(theta)
    sin_t = np.sin(theta)

    following = np.zeros(n)
    after_following = np.zeros(n)
    for sample in samples[::-1]:
        current = sample + 2.0 * cos_t * following - after_following
        after_following = following
        following = current

    ak = (following - after_following * cos_t) / n
    bk = -(after_following * sin_t) / n
    power = ak * ak + bk * bk
    return ak.tolist(), bk.tolist(), power.tolist()