#!/usr/bin/env python3
# /lecturn/main.py
"""
Lecturn launcher for source checkouts.

Puts ``src/`` on the import path and hands over to :func:`lecturn.main.start`.
Installed copies use the ``lecturn`` console script instead.
"""

import os
import sys

# Ensure the 'lecturn' package is importable when run from a checkout.
src_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_root not in sys.path:
    sys.path.insert(0, src_root)

from lecturn.main import start  # noqa: E402


if __name__ == "__main__":
    start()
