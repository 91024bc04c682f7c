[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gptscript"
version = "0.1.0"
description = "Tool definitions, tool reference resolution and completion types for GPTScript programs"
requires-python = ">=3.10"
keywords = ["gptscript", "llm", "tools", "agents", "completion"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gptscript"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
