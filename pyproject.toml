[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pulsarfourier"
version = "0.1.0"
description = "Fourier analysis, peak detection and phase binning of pulsar time series"
requires-python = ">=3.10"
keywords = ["pulsar", "fourier", "fft", "phase binning", "power spectrum", "astronomy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pulsarfourier = "pulsarfourier.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pulsarfourier"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
