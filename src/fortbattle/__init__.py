"""Battle resolution engine for fort-and-army strategy games."""

__version__ = "0.1.0"
