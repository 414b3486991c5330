"""Public package surface for contextera.

Exports ``main`` for programmatic CLI invocation.
The indexing core lives in ``contextera.file_index`` and ``contextera.runtime``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
