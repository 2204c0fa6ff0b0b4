#!/usr/bin/env python3
"""NØDE timer — entry point.

Run with:
    python main.py
    python -m nodetimer
"""

from nodetimer.__main__ import main


if __name__ == "__main__":
    main()
