[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ctrltools"
version = "0.1.0"
description = "DeepCopy method generation for Go API types, with marker help formatting for the terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["code-generation", "deepcopy", "go", "kubernetes", "markers", "help"]
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ctrltools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
