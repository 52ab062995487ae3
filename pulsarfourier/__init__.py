"""Fourier analysis, phase binning and period search for pulsar time series."""

__version__ = "0.1.0"