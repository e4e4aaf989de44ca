"""Path writer for saving clipped and projected paths.

This module provides the PathWriter class, which writes paths as JSON or as
path text depending on the output file's extension.
"""

import json
from pathlib import Path

from cartoclip.domain import PathSegment
from cartoclip.exceptions import PathSaveError
from cartoclip.io.converter import path_to_data, path_to_string


class PathWriter:
    """Writes paths to disk.

    Example:
        writer = PathWriter(Path("coast-clipped.json"))
        writer.save(segments)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the path writer.

        Args:
            output_path: Where the path will be saved
        """
        self._output_path = output_path

    def save(self, path: list[PathSegment]) -> None:
        """Save a path to the output file.

        Args:
            path: The segments to save

        Raises:
            PathSaveError: If the file cannot be written
        """
        if self._output_path.suffix.lower() == ".json":
            content = json.dumps(path_to_data(path), ensure_ascii=False, indent=2)
        else:
            content = path_to_string(path)

        try:
            self._output_path.write_text(content + "\n", encoding="utf-8")
        except OSError as e:
            raise PathSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_clipped_path(input_path: Path) -> Path:
        """Generate an output path next to the input.

        Converts: coast.json -> coast-clipped.json
                  border.txt -> border-clipped.txt

        Args:
            input_path: Original path file

        Returns:
            Path with -clipped suffix before extension
        """
        return input_path.parent / f"{input_path.stem}-clipped{input_path.suffix}"
