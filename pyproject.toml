[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cephctl"
version = "0.1.0"
description = "Declarative Ceph cluster configuration: diffing, applying, dumping and health checks"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["ceph", "storage", "configuration", "declarative", "healthcheck", "osd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cephctl"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
