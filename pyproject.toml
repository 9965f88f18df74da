[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stockreg"
version = "0.1.0"
description = "Shareholder registry in SQLite: shareholders, securities, owners, meetings, attendance and share operations, with reports"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shareholders",
    "registry",
    "securities",
    "shares",
    "meetings",
    "attendance",
    "sqlite",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Financial and Insurance Industry",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
stockreg = "stockreg.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["stockreg"]

[tool.pytest.ini_options]
addopts = "-ra"
