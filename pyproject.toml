[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaulton"
version = "0.1.0"
description = "A small OpenID Connect authorization endpoint with layered YAML and environment configuration"
requires-python = ">=3.10"
keywords = ["openid-connect", "oidc", "oauth2", "authorization", "pkce", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Systems Administration :: Authentication/Directory",
]
dependencies = [
    "pyyaml>=6.0",
    "starlette>=0.27",
    "uvicorn>=0.23",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.21",
    "httpx>=0.24",
]

[project.scripts]
vaulton = "vaulton.server:main"

[tool.hatch.build.targets.wheel]
packages = ["vaulton"]

[tool.hatch.build.targets.sdist]
include = ["vaulton", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
