import io
import math

import pytest

from pulsarfourier.analysis import (
    Peak,
    analyze_pulsar_data,
    detect_harmonics,
    estimate_noise_floor,
    find_best_period,
    find_peaks,
    generate_synthetic_data,
    phase_binning,
    read_data_file,
    validate_synthetic_data,
)


def test_synthetic_data_validates():
    freq1 = 23.0
    freq2 = 67.0
    synthetic = generate_synthetic_data(freq1, freq2)
    data = analyze_pulsar_data(synthetic, None, (freq1, freq2))
    delta_f = 1.0 / (data.n * data.delta_t)
    freq_error = delta_f / 2.0
    assert validate_synthetic_data(freq1, freq2, data.peaks, freq_error, delta_f)


def test_analysis_report_contents():
    out = io.StringIO()
    result = analyze_pulsar_data(generate_synthetic_data(23.0, 67.0), out, (23.0, 67.0))
    report = out.getvalue()
    assert report.startswith("Fourier Analysis Results\n")
    assert "Data points: 256\n" in report
    assert "Sampling interval: 0.004 s\n" in report
    assert "Validation: true\n" in report
    assert sum(1 for line in report.splitlines() if "\t" in line) == result.n + 1
    assert len(result.bins) == 11
    assert len(result.phases_of_bins) == 11
    assert len(result.bins_half) == 21
    assert result.n == 256
    assert result.delta_t == 0.004


def test_analysis_peaks_sorted_descending():
    result = analyze_pulsar_data(generate_synthetic_data(23.0, 67.0))
    values = [peak.value for peak in result.peaks]
    assert values == sorted(values, reverse=True)
    assert all(1 <= peak.index < result.n // 2 for peak in result.peaks)


def test_analysis_rejects_empty_data():
    with pytest.raises(ValueError):
        analyze_pulsar_data([])


def test_generate_synthetic_data_shape():
    data = generate_synthetic_data(23.0, 67.0)
    assert len(data) == 256
    assert data[0] == pytest.approx(10.0)
    assert all(abs(x) <= 20.0 + 1e-9 for x in data)


def test_read_data_file_skips_invalid(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("1.5\nabc\n\n  2\n-3e2\n")
    assert read_data_file(path) == [1.5, 2.0, -300.0]


def test_read_data_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_data_file(tmp_path / "missing.txt")


def test_find_peaks():
    power = [0.0, 5.0, 1.0, 7.0, 2.0, 0.0, 0.0, 0.0]
    assert find_peaks(power) == [Peak(3, 7.0), Peak(1, 5.0)]


def test_find_peaks_ignores_upper_half():
    power = [0.0, 0.0, 0.0, 0.0, 0.0, 9.0, 0.0, 0.0]
    assert find_peaks(power) == []


def test_phase_binning_full_bins():
    bins, phases = phase_binning([1.0, 2.0, 3.0, 4.0], 4.0, 1.0, 4)
    assert bins == [1.0, 2.0, 3.0, 4.0]
    assert phases == pytest.approx([0.0, math.pi / 2, math.pi, 3 * math.pi / 2])


def test_phase_binning_empty_bins_are_nan():
    bins, _ = phase_binning([1.0, 2.0, 3.0, 4.0], 4.0, 1.0, 8)
    assert [bins[i] for i in (0, 2, 4, 6)] == [1.0, 2.0, 3.0, 4.0]
    assert all(math.isnan(bins[i]) for i in (1, 3, 5, 7))


def test_phase_binning_averages_folded_samples():
    bins, _ = phase_binning([1.0, 3.0, 5.0, 7.0], 2.0, 1.0, 2)
    assert bins == [3.0, 5.0]


def test_validate_synthetic_data():
    peaks = [Peak(6, 1.0), Peak(17, 1.0)]
    assert validate_synthetic_data(6.2, 17.0, peaks, 0.5, 1.0)
    assert not validate_synthetic_data(8.0, 17.0, peaks, 0.5, 1.0)


def test_detect_harmonics():
    peaks = [Peak(i, 1.0) for i in (10, 20, 30, 5, 25, 31)]
    assert detect_harmonics(peaks, 10) == [20, 30]


def test_find_best_period_constant_data_keeps_candidate():
    best, error = find_best_period([1.0] * 100, 0.25, 0.004, 30)
    assert best == 0.25
    assert error > 0.0


def test_find_best_period_within_scan_range():
    data = generate_synthetic_data(23.0, 67.0)
    candidate = 1.0 / 6
    best, _ = find_best_period(data, candidate, 0.004, 30)
    assert candidate * 0.9 - 1e-12 <= best <= candidate * 1.1 + 1e-12


def test_estimate_noise_floor():
    assert estimate_noise_floor([3.0, 1.0, 2.0]) == 2.0
    assert estimate_noise_floor([4.0, 1.0, 3.0, 2.0]) == 3.0


def test_estimate_noise_floor_empty():
    with pytest.raises(ValueError):
        estimate_noise_floor([])