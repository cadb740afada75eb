[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kestrelchess"
version = "0.1.0"
description = "Chess engine building blocks: bitboards, a KPK bitbase, material imbalance and benchmark command lists"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "bitboard", "bitbase", "endgame", "uci", "benchmark"]
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
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
kestrelchess-bench = "kestrelchess.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["kestrelchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
