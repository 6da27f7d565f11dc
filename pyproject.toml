[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tonwallet"
version = "0.1.0"
description = "Data models and services for a TON wallet API: addresses, transactions, events, request authentication, key derivation and per-account locks"
requires-python = ">=3.10"
keywords = ["ton", "wallet", "blockchain", "tokens", "transactions", "hmac", "argon2"]
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
    "Framework :: AsyncIO",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "pyyaml",
    "cryptography>=44",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["tonwallet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
