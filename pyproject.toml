[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blecore"
version = "0.1.0"
description = "Bluetooth Low Energy building blocks: UUIDs, GATT profile model, advertising data parsing, HCI parameter validation and SMP pairing primitives"
requires-python = ">=3.10"
keywords = ["bluetooth", "ble", "gatt", "smp", "advertising", "hci", "pairing"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["blecore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
