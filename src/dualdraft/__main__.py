"""
DualDraft package entry point.

Allows running dualdraft as a module:
    python -m dualdraft
"""

from dualdraft.cli import main

if __name__ == "__main__":
    main()
