"""
File parsing for grid data.

Grids are stored as semicolon-delimited text: one line per row, no header.
The loader is designed to work within railway-oriented programming pipelines,
returning an `IOResult` container and logging its outcome.

Notes
-----
- Parsing is lossy on purpose: malformed fields become ``0.0``
- The loader does not check the grid shape, `analysis.validate_grid` does
"""

from .grid_loader import load_grid

__all__ = ("load_grid",)
