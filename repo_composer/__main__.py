"""
Main entry point for running repo_composer as a module.

Usage:
    python -m repo_composer -i <private-repo> -o <public-repo> [options]
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
