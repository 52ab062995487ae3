# pulsarfourier

Analyse pulsar time series with a Fourier transform, then fold the data
at the periods found to build a pulse profile.

The analysis assumes samples taken every 4 ms and does the following:

- computes the Fourier coefficients `A_k`, `B_k` and the power spectrum
  with a second-order (Goertzel-style) recurrence;
- takes the median of the power spectrum as the noise floor and lists the
  local maxima below the Nyquist index, strongest first, with their SNR;
- folds the data at the strongest peak (11 phase bins) and at the second
  strongest peak (21 phase bins);
- lists the peaks that are close to an integer multiple of the fundamental;
- scans ±10% around the candidate period for the period that gives the
  largest spread between phase bins.

## Installation

```
pip install .
```

## Command line

Input files hold one sample per line.

Analyse a data file. Lines that are not numbers are skipped. The report
goes to standard output, or to a file if you give `-o`:

```
pulsarfourier analyze -i data.txt
pulsarfourier analyze -i data.txt -o report.txt
```

Generate 256 synthetic samples, analyse them, and check that both
frequencies are recovered. The first frequency is the cosine component and
the second is the sine component. Both have amplitude 10:

```
pulsarfourier synthetic 23 67
```

Compute a plain FFT of a file and write one complex value per line. The
values go to standard output, or to a file if you give `-o`:

```
pulsarfourier fft -i data.txt
pulsarfourier fft -i data.txt -o spectrum.txt
```

With `fft`, every non-empty line must be a number.

### Plotting

If you add `-p` / `--plot` to `analyze` or `synthetic`, the command writes
a gnuplot script and its data to the system temporary directory and runs
`gnuplot` once for each figure: the spectrum, the reconstruction, and the
two phase profiles. The scripts use the `tikz` terminal and write `.tex`
files under `Pfp-latex/plots/`, relative to the current directory. That
directory must already exist.

For this to work, `gnuplot` must be on your `PATH` and must support the
`tikz` terminal. If it cannot be started, the command prints
`Error plotting results: ...` and exits with status 1.

## Library use

```python
import io
from pulsarfourier.analysis import generate_synthetic_data, analyze_pulsar_data

data = generate_synthetic_data(23.0, 67.0)
report = io.StringIO()
result = analyze_pulsar_data(data, report, (23.0, 67.0))
print(report.getvalue())
print([peak.index for peak in result.peaks])
```

If you omit `output` in `analyze_pulsar_data`, the report is discarded.
The function returns an `AnalysisResult` holding the raw data, `ak`, `bk`,
`power`, `peaks`, `harmonics`, and the phase bins with their phases. An
empty data set raises `ValueError`.

`pulsarfourier.analysis` also exposes the individual steps:
`read_data_file`, `find_peaks`, `estimate_noise_floor`, `phase_binning`,
`detect_harmonics`, `find_best_period` and `validate_synthetic_data`.

`pulsarfourier.ft.compute_fourier_transform(data)` returns the
`(ak, bk, power)` lists on their own. `pulsarfourier.ft.fft(input_path,
output_path)` is the FFT behind the `fft` command and returns the spectrum.

`pulsarfourier.plotting.plot_results(result, script_path, data_path,
is_synthetic)` produces the figures described above.

## Limitations

- The sampling interval is fixed at 4 ms.
- Figures are made only through an external `gnuplot`. The package does
  not display plots or draw them by itself.