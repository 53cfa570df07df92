[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matrixclock"
version = "0.1.0"
description = "Clock keeping, LED matrix frame handling and a compact JSON toolkit for small display clocks"
requires-python = ">=3.10"
dependencies = []
keywords = ["clock", "time", "max7219", "led-matrix", "json", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["matrixclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
