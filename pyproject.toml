[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hvacquote"
version = "0.1.0"
description = "Size residential HVAC systems from square footage and quote compatible furnace, condenser and coil bundles from a SQLite catalogue."
requires-python = ">=3.10"
keywords = ["hvac", "quote", "btu", "furnace", "condenser", "sizing", "sqlite"]
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
    "Topic :: Office/Business",
    "Topic :: Database",
]
dependencies = [
    "werkzeug",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hvacquote-seed = "hvacquote.seeder:main"

[tool.hatch.build.targets.wheel]
packages = ["hvacquote"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
