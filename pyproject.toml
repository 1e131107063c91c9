[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mscdoc"
version = "0.1.0"
description = "Document model for simple vector drawings of circles, rectangles and paths, saved as zipped XML (.pxz)"
requires-python = ">=3.10"
dependencies = []
keywords = ["vector", "drawing", "document", "xml", "zip", "pxz"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Vector-Based",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mscdoc = "mscdoc.app:main"

[tool.hatch.build.targets.wheel]
packages = ["mscdoc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
