[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "renderkit"
version = "0.1.0"
description = "Vector and quaternion math, skyline rectangle packing and a text-editing state machine for real-time rendering tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["vector", "quaternion", "3d", "rectangle-packing", "texture-atlas", "text-editing", "undo"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["renderkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
