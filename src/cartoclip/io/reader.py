"""Path reader for loading path files.

This module provides the PathReader class for loading path files in either
the compact text notation or JSON, and converting them into domain models.
"""

import json
from pathlib import Path

from cartoclip.domain import PathSegment
from cartoclip.exceptions import PathFormatError, PathLoadError
from cartoclip.io.converter import parse_path, path_from_data


class PathReader:
    """Loads path files into lists of segments.

    Files ending in .json hold a list of {"type": ..., "args": [...]}
    objects; anything else is read as path text.

    Example:
        with PathReader(Path("coast.json")) as reader:
            segments = reader.path
    """

    def __init__(self, path_file: Path) -> None:
        """Initialize the path reader.

        Args:
            path_file: Path to the JSON or text path file
        """
        self._path_file = path_file
        self._segments: list[PathSegment] | None = None

    def load(self) -> None:
        """Load and parse the path file.

        Raises:
            PathLoadError: If the file does not exist or cannot be read
            PathFormatError: If the file content is not a valid path
        """
        if not self._path_file.exists():
            raise PathLoadError(str(self._path_file), "file not found")

        try:
            text = self._path_file.read_text(encoding="utf-8")
        except OSError as e:
            raise PathLoadError(str(self._path_file), str(e)) from e

        if self.format == "json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise PathFormatError(f"{self._path_file}: {e}") from e
            self._segments = path_from_data(data)
        else:
            self._segments = parse_path(text)

    @property
    def format(self) -> str:
        """Return the file format: 'json' or 'text'."""
        return "json" if self._path_file.suffix.lower() == ".json" else "text"

    @property
    def path(self) -> list[PathSegment]:
        """Return the loaded segments.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._segments is None:
            raise RuntimeError("Path not loaded. Call load() first.")
        return self._segments

    def close(self) -> None:
        """Forget the loaded segments."""
        self._segments = None

    def __enter__(self) -> "PathReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
