"""Entry point for running flashcard_pairs as a module.

Usage:
    python -m flashcard_pairs <command> [options]
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
