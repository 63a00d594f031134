[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainbox"
version = "0.1.0"
description = "Run configurable chains of emitter, reader, filter and sender processes connected by channels"
requires-python = ">=3.10"
keywords = ["pipeline", "chain", "processes", "channels", "emitter", "filter", "threads"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
chainbox = "chainbox.app:main"

[tool.hatch.build.targets.wheel]
packages = ["chainbox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
