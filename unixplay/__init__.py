"""Small Unix tools built on sockets, pipes, threads and file locks."""

__version__ = "0.1.0"