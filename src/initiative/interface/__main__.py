"""
Run initiative.sh.

Usage:
    python -m initiative.interface
"""

from .cli import main

if __name__ == "__main__":
    main()
