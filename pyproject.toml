[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diffqos"
version = "0.1.0"
description = "Differentiated Services packet queues with strict priority and deficit round robin scheduling"
requires-python = ">=3.10"
dependencies = []
keywords = ["diffserv", "qos", "queueing", "spq", "drr", "scheduling", "networking", "dscp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diffqos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
