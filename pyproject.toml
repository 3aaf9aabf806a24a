[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asyncpress"
version = "0.1.0"
description = "Streaming compression and decompression adaptors for asynchronous readers and writers"
requires-python = ">=3.10"
keywords = [
    "compression",
    "decompression",
    "asyncio",
    "streaming",
    "gzip",
    "zlib",
    "deflate",
    "brotli",
    "bzip2",
    "zstd",
    "xz",
    "lzma",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "brotli",
    "zstandard",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["asyncpress"]

[tool.hatch.build.targets.sdist]
include = ["asyncpress", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
