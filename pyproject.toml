[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solarsim"
version = "0.1.0"
description = "Gravitational N-body solar system simulator with serial, threaded, pooled and barrier-synchronised stepping"
requires-python = ">=3.10"
keywords = ["n-body", "gravity", "simulation", "astronomy", "solar system", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
solarsim = "solarsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["solarsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
