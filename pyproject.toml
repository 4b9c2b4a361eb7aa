[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oberon0"
version = "0.0.1"
description = "Abstract syntax tree, symbol table and semantic checker for the Oberon-0 language"
requires-python = ">=3.10"
dependencies = []
keywords = ["oberon", "oberon-0", "compiler", "ast", "semantic-analysis", "symbol-table", "constant-folding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
packages = ["oberon0"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
