"""Path I/O layer for cartoclip.

This module handles reading and writing path files. It provides a clean
abstraction layer between files on disk and the domain models.

Key responsibilities:
- Parse the compact path text notation (M0,0 L1,0.5 ...)
- Read and write JSON path files
- Render paths as text for diagnostics

Key classes:
- PathReader: Load path files
- PathWriter: Save path files
"""

from cartoclip.io.converter import path_from_data, path_to_data, parse_path, path_to_string
from cartoclip.io.reader import PathReader
from cartoclip.io.writer import PathWriter

__all__ = [
    "PathReader",
    "PathWriter",
    "parse_path",
    "path_from_data",
    "path_to_data",
    "path_to_string",
]
