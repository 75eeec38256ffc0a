[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ccstatus"
version = "0.1.0"
description = "Customizable status line for Claude Code"
requires-python = ">=3.10"
dependencies = []
keywords = ["claude", "status line", "terminal", "cli", "ansi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
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
ccstatus = "ccstatus.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ccstatus"]

[tool.pytest.ini_options]
addopts = "-ra"
