"""
Entry point for running ymake as a module.

Usage: python -m ymake [TARGET] [options]
"""

from ymake.cli.parser import main

if __name__ == "__main__":
    main()
