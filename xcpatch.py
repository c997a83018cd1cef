#!/usr/bin/env python3
"""
Source-checkout entrypoint.

Allows running the tool without installing it:
  python3 xcpatch.py -e <export dir> ...
"""

import os
import sys

# Put `src/` on sys.path so a plain checkout can import the package.
_HERE = os.path.dirname(os.path.abspath(__file__))
_SRC = os.path.join(_HERE, "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)

# Imported as `xcpatch`, this file stands in for `src/xcpatch/` instead of shadowing it.
__path__ = [os.path.join(_SRC, "xcpatch")]


def main(argv: list[str] | None = None) -> int:
    from xcpatch.cli import main as _main

    return _main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
