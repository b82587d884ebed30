[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "builtinsim"
version = "0.1.0"
description = "Simulated low-level runtime builtins: byte-addressed memory routines and stack probes"
requires-python = ">=3.10"
dependencies = []
keywords = ["memcpy", "memmove", "memset", "memcmp", "stack-probe", "chkstk", "builtins", "simulation"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["builtinsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
