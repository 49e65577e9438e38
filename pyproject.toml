[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simpleodom"
version = "0.1.0"
description = "Scan-to-map lidar odometry by reward maximisation, with a KITTI-style drift evaluator"
requires-python = ">=3.10"
keywords = ["lidar", "odometry", "point cloud", "registration", "kitti", "slam"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "scipy",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
simpleodom = "simpleodom.cli:main"
simpleodom-evaluate = "simpleodom.evaluate:main"

[tool.hatch.build.targets.wheel]
packages = ["simpleodom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
