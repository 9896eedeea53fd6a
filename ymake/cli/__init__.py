"""
ymake CLI module.

This module provides the command-line interface for ymake.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
