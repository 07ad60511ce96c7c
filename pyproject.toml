[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slpctl"
version = "0.1.0"
description = "Code generator for game state machine scaffolding and Redis-backed table cache codecs"
requires-python = ">=3.10"
dependencies = []
keywords = ["codegen", "code-generator", "state-machine", "scaffolding", "cache", "redis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
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

[project.scripts]
slpctl = "slpctl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slpctl"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
