[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "serdedoc"
version = "0.1.0"
description = "Generate Markdown and JSON Schema documentation for serde structs in Rust source trees."
requires-python = ">=3.10"
dependencies = []
keywords = ["serde", "rust", "documentation", "json-schema", "markdown"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
serde-doc = "serdedoc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["serdedoc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
