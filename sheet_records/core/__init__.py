"""Core conversion engine modules.

WHY: The core package is the stable heart of the library: the shape
model and the record/grid conversion logic. It knows nothing about
HTTP, credentials or spreadsheet addressing.

HOW: schema.py defines shapes and walks them into column paths,
headers.py names those paths, coercion.py converts scalars to and from
text, encoder.py and decoder.py convert single rows, grid.py assembles
whole grids.

RULES:
- Pure functions only, no I/O, no module-level mutable state
- Errors come from errors.py and are never swallowed
"""
