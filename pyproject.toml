[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysprog"
version = "0.1.0"
description = "POSIX system programming building blocks: restartable descriptor I/O, process chains and fans, pipes, directory walking and small command-line tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "posix",
    "unix",
    "system programming",
    "fork",
    "pipes",
    "file descriptors",
    "select",
    "processes",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sysprog-keeplog = "sysprog.keeplog:main"
sysprog-makeargv = "sysprog.argv:main"
sysprog-wordaverage = "sysprog.wordaverage:main"
sysprog-copyfile = "sysprog.filecmds:copyfile_main"
sysprog-monitor = "sysprog.filecmds:monitor_main"
sysprog-readline = "sysprog.filecmds:readline_main"
sysprog-redirect = "sysprog.filecmds:redirect_main"
sysprog-cwd = "sysprog.dirs:cwd_main"
sysprog-procs = "sysprog.processes:main"
sysprog-chainwrite = "sysprog.chainwrite:main"
sysprog-pipes = "sysprog.pipes:main"

[tool.hatch.build.targets.wheel]
packages = ["sysprog"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
