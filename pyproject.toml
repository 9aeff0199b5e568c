[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgnodes"
version = "0.1.0"
description = "A small node graph for image processing: load, adjust brightness and contrast, blur and split channels."
requires-python = ">=3.10"
keywords = ["image", "node-graph", "image-processing", "blur", "brightness", "contrast", "channels"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Raster-Based",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
imgnodes = "imgnodes.app:main"

[tool.hatch.build.targets.wheel]
packages = ["imgnodes"]

[tool.pytest.ini_options]
addopts = "-ra"
