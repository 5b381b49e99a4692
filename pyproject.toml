[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "movefuzz"
version = "0.1.0"
description = "Chain-agnostic fuzzing driver, Move transaction payload types and edge coverage for smart-contract fuzzing"
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzing", "move", "smart-contracts", "blockchain", "testing", "coverage"]
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["movefuzz"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
