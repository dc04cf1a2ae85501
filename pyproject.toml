[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "devtoolkit"
version = "0.1.0"
description = "Developer utilities: PE header parsing, packet header decoding, hot-key settings and installer packaging"
requires-python = ">=3.10"
dependencies = []
keywords = ["pe", "portable-executable", "packet", "udp", "gige-vision", "hexdump", "installer", "packaging"]
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
devtoolkit-package = "devtoolkit.packager:main"

[tool.hatch.build.targets.wheel]
packages = ["devtoolkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
