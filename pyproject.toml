[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "navi"
version = "2.12.0"
description = "Interactive cheatsheet tool for the command line, driven by fzf or skim"
requires-python = ">=3.10"
keywords = ["cheatsheet", "fzf", "skim", "terminal", "shell", "snippets", "tldr", "cheat.sh"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
navi = "navi.handler:main"

[tool.hatch.build.targets.wheel]
packages = ["navi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
