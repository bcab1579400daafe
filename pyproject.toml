[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kconftools"
version = "1.0.0"
description = "Kconfig expression algebra, gettext template extraction and curses dialog widgets"
requires-python = ">=3.10"
dependencies = []
keywords = ["kconfig", "configuration", "gettext", "curses", "dialog", "build"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kconftools"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
