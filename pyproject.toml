[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "suikit"
version = "0.1.0"
description = "Sui blockchain data types, BCS encoding, Ed25519 signing, transaction building and JSON-RPC response parsing"
requires-python = ">=3.10"
dependencies = [
    "pynacl",
]
keywords = ["sui", "blockchain", "bcs", "transaction", "move", "ed25519"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["suikit*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
