"""
`python -m xcpatch` entrypoint.

The installed console script `xcpatch` calls the same `xcpatch.cli:main`.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
