[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockdb"
version = "0.1.0"
description = "Storage-engine building blocks: pages, a block file manager, a write-ahead log, a buffer pool, block locks and checkpoint log records."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "storage", "buffer-pool", "write-ahead-log", "locking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
