[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "htmcore"
version = "0.1.0"
description = "Hierarchical temporal memory building blocks: scalar encoder, spatial pooler and temporal memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["htm", "hierarchical temporal memory", "sdr", "spatial pooler", "temporal memory", "encoder"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
htmcore-demo = "htmcore.demo:main"

[tool.setuptools.packages.find]
include = ["htmcore*"]

[tool.pytest.ini_options]
addopts = "-ra"
