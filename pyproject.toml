[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "krua"
version = "0.1.0"
description = "Small interpreters for a k-like array language: a direct-evaluation REPL and an object, tokenizer and structural verb library"
requires-python = ">=3.10"
dependencies = []
keywords = ["k", "apl", "array-language", "interpreter", "repl", "vector"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
krua = "krua.mini.interp:main"

[tool.hatch.build.targets.wheel]
packages = ["krua"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
