[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scalable_api"
version = "0.1.0"
description = "A small layered REST service for managing users and their roles"
requires-python = ">=3.10"
keywords = ["rest", "api", "flask", "sqlalchemy", "users"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
dependencies = [
    "flask",
    "sqlalchemy",
    "bcrypt",
    "python-dotenv",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
scalable-api = "scalable_api.app:main"

[tool.hatch.build.targets.wheel]
packages = ["scalable_api"]

[tool.pytest.ini_options]
addopts = "-ra"
