"""
User-facing entry points: the Python API and the command line.
"""

from .api import TreeDownloader

__all__ = ["TreeDownloader"]
