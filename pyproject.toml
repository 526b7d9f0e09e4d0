[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voicepitch"
version = "0.1.0"
description = "Pure-Python mixed-radix FFTs and autocorrelation pitch detection on 16-bit PCM audio frames"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fft",
    "dsp",
    "pitch detection",
    "autocorrelation",
    "audio",
    "pcm",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voicepitch"]

[tool.hatch.build.targets.sdist]
include = ["voicepitch", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
