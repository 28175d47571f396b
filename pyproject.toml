[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webservpy"
version = "0.1.0"
description = "Building blocks of a small HTTP/1.1 server: virtual hosts, listening sockets, static file and directory listing responses, CGI output and redirects"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "virtual-host", "autoindex", "chunked", "cgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["webservpy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
