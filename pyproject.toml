[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmir"
version = "0.1.0"
description = "Arena-backed building blocks for reading, editing and writing WebAssembly module sections"
requires-python = ">=3.10"
dependencies = []
keywords = ["webassembly", "wasm", "binary", "leb128", "module"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wasmir"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
