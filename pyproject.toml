[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigmat"
version = "0.1.0"
description = "Dense vectors and matrices, CSV and WAVE file I/O, and a waveform generator for signal work"
requires-python = ">=3.10"
dependencies = []
keywords = ["vector", "matrix", "wave", "csv", "signal", "waveform", "sweep"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sigmat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
