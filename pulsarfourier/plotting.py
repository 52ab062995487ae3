"""Render analysis results as TikZ figures through gnuplot."""

from __future__ import annotations

import math
import subprocess
from os import PathLike
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from pulsarfourier.analysis import AnalysisResult

_PLOT_DIR = "Pfp-latex/plots"


def _display(value: float) -> str:
    """Shortest positional rendering of a float, never in exponent form."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return np.format_float_positional(float(value), unique=True, trim="-")


def _sqrt(value: float) -> float:
    if math.isnan(value) or value < 0:
        return math.nan
    return math.sqrt(value)


def _write_lines(path: Path, lines: Iterable[str]) -> None:
    with open(path, "w", encoding="utf-8") as handle:
        for line in lines:
            handle.write(line + "\n")


def run_gnuplot(script_path: str | PathLike[str]) -> None:
    """Run gnuplot on a script file; raises OSError if it cannot be started."""
    subprocess.run(["gnuplot", str(script_path)], check=False)


def _spectrum_plot(
    data: AnalysisResult, script: Path, data_path: Path, is_synthetic: bool
) -> None:
    n = data.n
    if n < 5:
        raise ValueError("at least 5 samples are needed to plot the spectrum")

    _write_lines(
        data_path,
        (
            f"{_display(i / (n * data.delta_t))} {_display(p)}"
            for i, p in enumerate(data.power)
            if i != 0
        ),
    )

    lines = ["set terminal tikz tex"]
    if is_synthetic:
        lines += [
            f"set output '{_PLOT_DIR}/ft_synthetic.tex'",
            "set xtics add ('$k_1$' 23)",
            "set xtics add ('$k_2$' 67)",
            "set xtics out",
        ]
    else:
        lines += [
            f"set output '{_PLOT_DIR}/ft.tex'",
            "set xtics add ('$k_1$' 30.273)",
            "set xtics add ('$k_2$' 59.570)",
            "set xtics add ('$k_3$' 89.844)",
            "set x2tics ('$k_4$' 99.609)",
            "set xtics add ('$k_5$' 121.094)",
        ]
    nyquist = (n - 5) // 2
    lines += [
        "set xtics out",
        "set xlabel 'Frequency (Hz)'",
        "set mxtics 5",
        "set mytics 5",
        "set ylabel 'Power'",
        f"set arrow from {nyquist}, graph 0 to {nyquist}, graph 1 nohead dt '.'",
        f"plot '{data_path}' using 1:2 notitle with lines lt black",
    ]
    _write_lines(script, lines)
    run_gnuplot(script)


def _reconstruction_plot(
    data: AnalysisResult, script: Path, data_path: Path, is_synthetic: bool
) -> None:
    n = data.n
    delta_t = data.delta_t
    reconstruction = []
    for k, (a, b) in enumerate(zip(data.ak, data.bk)):
        theta = 2.0 * math.pi * k / n
        t = k * delta_t
        reconstruction.append(a * math.cos(theta * t) + b * math.sin(theta * t))

    _write_lines(
        data_path,
        (
            f"{_display(i * delta_t)} {_display(x)} {_display(raw)}"
            for i, (x, raw) in enumerate(zip(reconstruction, data.raw_data))
            if i != 0
        ),
    )

    name = "reconstruction_synthetic.tex" if is_synthetic else "reconstruction.tex"
    _write_lines(
        script,
        [
            "set terminal tikz tex",
            f"set output '{_PLOT_DIR}/{name}'",
            "set mxtics 5",
            "set mytics 5",
            "set xlabel 'Time (s)'",
            "set ylabel 'Amplitude'",
            "set xtics out",
            f"plot [0:1] [] '{data_path}' using 1:2 notitle with lines lt black",
            f"set output '{_PLOT_DIR}/reconstruction_raw.tex'",
            f"plot [0:1] [] '{data_path}' using 1:3 notitle with lines lt black",
        ],
    )
    run_gnuplot(script)


def _phase_plot(
    bins: Sequence[float],
    phases: Sequence[float],
    script: Path,
    data_path: Path,
    output_name: str,
    label: str,
    offset: str,
) -> None:
    rows = []
    for shift in (0.0, 1.0):
        for phase, count in zip(phases, bins):
            position = phase / (2.0 * math.pi) + shift
            rows.append(f"{_display(position)} {_display(count)} {_display(_sqrt(count))}")
    _write_lines(data_path, rows)

    _write_lines(
        script,
        [
            "set terminal tikz tex",
            f"set output '{_PLOT_DIR}/{output_name}'",
            "set xlabel 'Pulse Phase'",
            "set ylabel 'Count'",
            "set mxtics 5",
            "set mytics 5",
            "set xtics out",
            "set style fill empty border 0",
            f"set label '{label}' at graph 0.95, graph 0.95 center",
            f"plot [] [] '{data_path}' using ($1+{offset}):2:3 notitle with yerrorbars lt black, "
            f"'{data_path}' using 1:2 notitle with hsteps forward lt black",
        ],
    )
    run_gnuplot(script)


def plot_results(
    data: AnalysisResult,
    gnu_script_path: str | PathLike[str],
    data_path: str | PathLike[str],
    is_synthetic: bool,
) -> None:
    """Plot the spectrum, the reconstruction and both phase profiles.

    Each figure is produced by writing a gnuplot script and its data to the
    given paths and running gnuplot on the script.
    """
    script = Path(gnu_script_path)
    table = Path(data_path)
    suffix = "_synthetic" if is_synthetic else ""

    _spectrum_plot(data, script, table, is_synthetic)
    _reconstruction_plot(data, script, table, is_synthetic)
    _phase_plot(
        data.bins,
        data.phases_of_bins,
        script,
        table,
        f"phasebins{suffix}.tex",
        "$f$",
        "0.045",
    )
    _phase_plot(
        data.bins_half,
        data.phases_of_bins_half,
        script,
        table,
        f"phasebins_half{suffix}.tex",
        "$1/2f$",
        "0.025",
    )