[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phasm"
version = "0.1.0"
description = "Payload framing, compression and syndrome-trellis coding for hiding encrypted messages in JPEG DCT coefficients"
requires-python = ">=3.10"
keywords = ["steganography", "jpeg", "stc", "syndrome-trellis", "brotli", "chacha20"]
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
    "Topic :: Security",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "brotli",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["phasm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
