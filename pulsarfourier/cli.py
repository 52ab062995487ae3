"""Command line interface of the pulsar Fourier analyzer."""

from __future__ import annotations

import argparse
import sys
import tempfile
from contextlib import ExitStack
from pathlib import Path
from typing import Sequence, TextIO

from pulsarfourier.analysis import (
    analyze_pulsar_data,
    generate_synthetic_data,
    read_data_file,
)
from pulsarfourier.ft import fft
from pulsarfourier.plotting import plot_results


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="Pulsar Fourier Analyzer",
        description="Analyzes pulsar data using Fourier transform and phase binning",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Analyze pulsar data from file")
    analyze.add_argument("-i", "--input", type=Path, required=True, help="Input data file")
    analyze.add_argument(
        "-o", "--output", type=Path, help="Output file for results (stdout if not specified)"
    )
    analyze.add_argument("-p", "--plot", action="store_true", help="Plot the results")

    synthetic = commands.add_parser("synthetic", help="Generate and analyze synthetic data")
    synthetic.add_argument("freq1", type=float, help="First frequency component (cosine)")
    synthetic.add_argument("freq2", type=float, help="Second frequency component (sine)")
    synthetic.add_argument(
        "-o", "--output", type=Path, help="Output file for results (stdout if not specified)"
    )
    synthetic.add_argument("-p", "--plot", action="store_true", help="Plot the results")

    transform = commands.add_parser(
        "fft",
        help="Compute the Fourier transform of a file and return the results to stdout or a file",
    )
    transform.add_argument("-i", "--input", type=Path, required=True, help="Input data file")
    transform.add_argument("-o", "--output", type=Path, help="Output data file")
    return parser


def _open_output(stack: ExitStack, path: Path | None) -> TextIO:
    if path is None:
        return sys.stdout
    return stack.enter_context(open(path, "w", encoding="utf-8"))


def _temp_paths() -> tuple[Path, Path]:
    temp_dir = Path(tempfile.gettempdir())
    return temp_dir / "pfp-temp-gnuscript", temp_dir / "pfp-temp-data"


def _analyze_and_plot(
    data: list[float],
    output: Path | None,
    plot: bool,
    synthetic: tuple[float, float] | None,
) -> int:
    with ExitStack() as stack:
        out = _open_output(stack, output)
        result = analyze_pulsar_data(data, out, synthetic)
        out.flush()

    if plot:
        script, table = _temp_paths()
        try:
            plot_results(result, script, table, synthetic is not None)
        except OSError as error:
            print(f"Error plotting results: {error}", file=sys.stderr)
            return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run the chosen command."""
    args = _build_parser().parse_args(argv)

    if args.command == "analyze":
        try:
            data = read_data_file(args.input)
        except OSError as error:
            print(f"Error reading data file: {error}", file=sys.stderr)
            return 1
        return _analyze_and_plot(data, args.output, args.plot, None)

    if args.command == "synthetic":
        data = generate_synthetic_data(args.freq1, args.freq2)
        return _analyze_and_plot(data, args.output, args.plot, (args.freq1, args.freq2))

    fft(args.input, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())