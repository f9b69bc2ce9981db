[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pipestreams"
version = "0.1.0"
description = "Composable pull-based read and write streams with filtering, mapping, batching, grouping and JSON/CSV encoding."
requires-python = ">=3.10"
dependencies = []
keywords = ["streams", "pipeline", "iterator", "csv", "json", "ndjson", "etl"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pipestreams"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
