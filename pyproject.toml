[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskwidgets"
version = "0.1.0"
description = "Desktop widget framework with plugin management, per-instance settings storage and a memory monitor widget"
requires-python = ">=3.10"
keywords = ["desktop", "widgets", "plugins", "settings", "meminfo", "monitor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "regex",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deskwidgets"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
