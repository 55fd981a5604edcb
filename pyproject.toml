[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hunming"
version = "0.1.0"
description = "Cross-platform alias manager for Bash, Zsh and PowerShell."
requires-python = ">=3.11"
keywords = ["alias", "shell", "bash", "zsh", "powershell", "dotfiles"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]
dependencies = [
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hunming = "hunming.app:main"

[tool.hatch.build.targets.wheel]
packages = ["hunming"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
