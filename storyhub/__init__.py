"""Storyhub: story documents, blog articles and media over HTTP."""

__version__ = "1.0.0"
