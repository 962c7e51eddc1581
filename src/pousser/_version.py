"""Package version, shared by the package root and the client header."""

__version__ = "0.2.0"
