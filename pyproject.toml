[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "releval"
version = "0.1.0"
description = "Retrieval evaluation measures: precision, MAP, nDCG, bpref, inferred AP, preference measures and z-score reference files"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "information retrieval",
    "evaluation",
    "map",
    "ndcg",
    "bpref",
    "precision",
    "relevance",
]
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
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["releval"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
