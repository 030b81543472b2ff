[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynmenu"
version = "5.3.0"
description = "A keyboard-driven terminal menu that filters lines from standard input, plus a file-testing filter"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["menu", "launcher", "fuzzy", "filter", "picker", "stest", "selector", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
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
test = [
    "pytest",
]

[project.scripts]
dynmenu = "dynmenu.cli:main"
dynmenu-stest = "dynmenu.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["dynmenu"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
