[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "csiaddons"
version = "0.1.0"
description = "Sidecar helpers for CSI-Addons: configuration, endpoint validation, driver identity probing, node registration and a gRPC server."
requires-python = ">=3.10"
dependencies = [
    "grpcio",
]
keywords = ["csi", "kubernetes", "storage", "sidecar", "grpc"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["csiaddons"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
