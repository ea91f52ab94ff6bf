[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linkcrush"
version = "0.1.0"
description = "A small URL shortening web service backed by MongoDB"
requires-python = ">=3.10"
keywords = ["url", "shortener", "flask", "mongodb", "web"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
    "pymongo",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
linkcrush = "linkcrush.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["linkcrush"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
