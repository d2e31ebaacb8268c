[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unixplay"
version = "0.1.0"
description = "Small Unix networking, IPC and threading tools: time, listing, web and license servers, datagram utilities and more"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sockets",
    "datagram",
    "unix-domain",
    "http",
    "license-server",
    "threads",
    "pipes",
    "file-locking",
    "select",
    "curses",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
timeserv = "unixplay.timeserv:server_main"
timeclnt = "unixplay.timeserv:client_main"
rlsd = "unixplay.rls:server_main"
rls-client = "unixplay.rls:client_main"
webserv = "unixplay.webserver:main"
lserv = "unixplay.licserver:main"
lclnt = "unixplay.licclient:main"
dgsend = "unixplay.dgtools:sender_main"
dgrecv = "unixplay.dgtools:receiver_main"
logfiled = "unixplay.logfile:server_main"
logfilec = "unixplay.logfile:client_main"
twordcount = "unixplay.wordcount:main"
tinybc = "unixplay.tinybc:main"
cmdpipe = "unixplay.cmdpipe:main"
file-ts = "unixplay.timefile:writer_main"
file-tc = "unixplay.timefile:reader_main"
selectdemo = "unixplay.selectwatch:main"
threaddemo = "unixplay.threaddemo:main"
tanimate = "unixplay.animate:main"

[tool.hatch.build.targets.wheel]
packages = ["unixplay"]

[tool.hatch.build.targets.sdist]
include = ["unixplay", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
