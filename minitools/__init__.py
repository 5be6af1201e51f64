"""Toy-language front end, toy shell and rectangle calculator."""

__version__ = "0.1.0"