"""
Main module entry point.

This allows running the engine headless as: python -m src.main
"""

from .runner import main

if __name__ == "__main__":
    main()
