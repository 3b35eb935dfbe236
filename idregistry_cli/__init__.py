"""
Command-line interface for the IdRegistry SDK.
"""
from .register import main

__all__ = ["main"]
