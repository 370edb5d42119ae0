[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zaplite"
version = "0.1.0"
description = "Structured logging building blocks: levels, an in-memory encoder, a sampler, a tee core, write syncers and logger adapters."
requires-python = ">=3.11"
dependencies = []
keywords = ["logging", "structured-logging", "sampling", "levels"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zaplite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
