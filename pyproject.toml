[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "digpainting"
version = "0.1.0"
description = "Approximate a target picture by repeatedly laying down textured brush strokes"
requires-python = ">=3.10"
keywords = ["painting", "generative-art", "brush-strokes", "sobel", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Artistic Software",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
    "numpy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dig-painting = "digpainting.app:main"

[tool.hatch.build.targets.wheel]
packages = ["digpainting"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
