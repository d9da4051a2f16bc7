[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wgtunnel"
version = "0.1.0"
description = "Building blocks of a userspace WireGuard-style tunnel: replay filtering, rate limiting, object pools, TAI64N timestamps, padding, peer endpoints, timers and staged packet queues"
requires-python = ">=3.10"
keywords = ["wireguard", "tunnel", "vpn", "replay", "ratelimiter", "tai64n", "timers"]
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
    "Topic :: System :: Networking",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wgtunnel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
