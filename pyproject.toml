[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "domekit"
version = "0.1.0"
description = "Building blocks and tools for a small game engine: option parsing, pairing, text helpers, logging, module registry, task queue, plugins and bundling"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "optparse", "getopt", "tar", "bundle", "plugins", "task-queue"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
domekit = "domekit.cli:main"
domekit-embed = "domekit.embed:main"

[tool.hatch.build.targets.wheel]
packages = ["domekit"]

[tool.pytest.ini_options]
addopts = "-ra"
