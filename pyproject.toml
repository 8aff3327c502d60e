[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "salesdesk"
version = "0.1.0"
description = "A small in-memory HTTP service for users and their sales, with an interactive console client."
requires-python = ">=3.10"
dependencies = [
    "flask",
    "requests",
]
keywords = ["sales", "users", "rest", "http", "flask"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
salesdesk-server = "salesdesk.server:main"
salesdesk-client = "salesdesk.client:main"

[tool.hatch.build.targets.wheel]
packages = ["salesdesk"]

[tool.pytest.ini_options]
addopts = "-ra"
