import numpy as np
import pytest

from pulsarfourier.ft import compute_fourier_transform, fft


def _parse_line(line):
    return complex(line[:-1] + "j")


def test_coefficients_match_numpy_fft():
    data = [0.5, 3.0, -1.25, 4.0, 2.0, -0.75, 1.5]
    ak, bk, _ = compute_fourier_transform(data)
    expected = np.fft.fft(data) / len(data)
    assert np.allclose(ak, expected.real)
    assert np.allclose(bk, expected.imag)


def test_power_is_sum_of_squared_coefficients():
    data = [1.0, -2.0, 3.5, 0.25, 7.0, -1.0]
    ak, bk, power = compute_fourier_transform(data)
    assert len(power) == len(data)
    for a, b, p in zip(ak, bk, power):
        assert p == pytest.approx(a * a + b * b)
        assert p >= 0.0


def test_constant_signal_has_only_dc():
    ak, bk, power = compute_fourier_transform([2.0] * 8)
    assert ak[0] == pytest.approx(2.0)
    assert bk[0] == pytest.approx(0.0)
    assert all(abs(p) < 1e-20 for p in power[1:])


def test_empty_input_gives_empty_results():
    assert compute_fourier_transform([]) == ([], [], [])


def test_fft_writes_file(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_text("1\n2\n\n  3  \n4\n")
    target = tmp_path / "out.txt"
    result = fft(source, target)
    lines = target.read_text().splitlines()
    assert len(lines) == 4
    assert lines[0] == "10+0i"
    parsed = [_parse_line(line) for line in lines]
    assert np.allclose(parsed, np.fft.fft([1.0, 2.0, 3.0, 4.0]))
    assert np.allclose(result, parsed)
    assert f"Wrote to {target}" in capsys.readouterr().out


def test_fft_to_stdout(tmp_path, capsys):
    source = tmp_path / "in.txt"
    source.write_text("0.5\n-1.5\n2.5\n")
    fft(source)
    lines = capsys.readouterr().out.splitlines()
    parsed = [_parse_line(line) for line in lines]
    assert np.allclose(parsed, np.fft.fft([0.5, -1.5, 2.5]), atol=1e-5)


def test_fft_rejects_non_numeric(tmp_path):
    source = tmp_path / "in.txt"
    source.write_text("1\nabc\n")
    with pytest.raises(ValueError):
        fft(source, tmp_path / "out.txt")


def test_fft_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        fft(tmp_path / "missing.txt")