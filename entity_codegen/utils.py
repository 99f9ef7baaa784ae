"""Utility functions for loading schema ASTs.

The schema is read as the JSON serialization of a GraphQL AST, either from
a file or from standard input.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Custom exception for JSON loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        JSONLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        # Don't raise, just warn - might still be valid JSON
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded schema AST from %s", file_path)
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_stream(stream: TextIO | None = None) -> tuple[str, Any]:
    """Load JSON data from a text stream (standard input by default)."""
    stream = stream or sys.stdin
    try:
        return "<stdin>", json.load(stream)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON on standard input: %s", e)
        raise JSONLoaderError(f"Invalid JSON on standard input: {e}") from e


def load_json(file_path: str | Path | None = None) -> tuple[str, Any]:
    """Load JSON data from a file, or from standard input when no path is given.

    ``"-"`` is treated like no path.
    """
    if file_path is None or str(file_path) == "-":
        return load_json_from_stream()
    return load_json_from_file(file_path)
