[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dover"
version = "0.3.0"
description = "Report and update the version number kept in your project's files."
requires-python = ">=3.11"
dependencies = []
keywords = ["version", "versioning", "bump", "release", "pre-release", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dover = "dover.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dover"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
