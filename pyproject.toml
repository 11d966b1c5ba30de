[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpcshell"
version = "0.10.2"
description = "Building blocks for an interactive gRPC client: request filling, descriptor-based specs, response formatting and a prompt."
requires-python = ">=3.10"
dependencies = [
    "prompt-toolkit",
]
keywords = ["grpc", "protobuf", "rpc", "client", "repl", "testing"]
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rpcshell"]

[tool.hatch.build.targets.sdist]
include = ["rpcshell", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
