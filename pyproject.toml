[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mkfkit"
version = "0.1.0"
description = "Read MKF game archives: decompress chunks, parse sprites, convert 16-bit pixels and extract WAV sounds"
requires-python = ">=3.10"
dependencies = []
keywords = ["mkf", "archive", "decompression", "sprite", "game-data"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mkfkit = "mkfkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mkfkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
