[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splinepath"
version = "0.1.0"
description = "Cubic spline paths, arc-length sampling and constraint-based motion profiles for differential-drive robots"
requires-python = ">=3.10"
dependencies = []
keywords = ["spline", "catmull-rom", "bezier", "trajectory", "motion-profile", "robotics", "path-planning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
splinepath-demo = "splinepath.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["splinepath"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
