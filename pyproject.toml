[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clientmatch"
version = "0.1.0"
description = "Match clients stored in MySQL with products they can afford, using Claude to generate a SQL report"
requires-python = ">=3.10"
keywords = ["mysql", "sql", "claude", "anthropic", "clients", "products", "report"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "httpx",
    "pymysql",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[project.scripts]
clientmatch = "clientmatch.app:main"

[tool.hatch.build.targets.wheel]
packages = ["clientmatch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
