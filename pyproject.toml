[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dmgpanel"
version = "0.1.0"
description = "Game Boy colour palettes, an ILI9225 panel driver over a pluggable bus, an 8x8 font and ROM selector helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["game boy", "dmg", "palette", "rgb565", "ili9225", "lcd", "emulator"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dmgpanel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
