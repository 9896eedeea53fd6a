"""
Entry point for running the ymake CLI as a module.

Usage: python -m ymake.cli [TARGET] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
