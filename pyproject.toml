[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "runnerstrack"
version = "0.1.0"
description = "HTTP service for tracking runners and their race results"
requires-python = ">=3.11"
dependencies = [
    "flask",
    "pyyaml",
]
keywords = ["runners", "race results", "athletics", "rest", "http", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
runnerstrack = "runnerstrack.server:main"

[tool.hatch.build.targets.wheel]
packages = ["runnerstrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
