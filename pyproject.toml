[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotseeker"
version = "0.1.0"
description = "A deep Q-network agent and a small 2D arena in which a dot seeks a goal"
requires-python = ">=3.10"
keywords = ["reinforcement-learning", "dqn", "q-learning", "simulation", "numpy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dotseeker = "dotseeker.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dotseeker"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
