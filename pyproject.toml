[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apisample"
version = "0.1.0"
description = "Users and categories stored through SQLAlchemy, with a WSGI server skeleton"
requires-python = ">=3.10"
keywords = ["api", "http", "server", "users", "sqlalchemy", "wsgi", "werkzeug"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "sqlalchemy>=2.0",
    "werkzeug>=3.0",
]

[project.optional-dependencies]
test = ["pytest>=7.0"]

[project.scripts]
apisample-server = "apisample.main:main"

[tool.hatch.build.targets.wheel]
packages = ["apisample"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
