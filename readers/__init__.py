#!/usr/bin/env python3
"""
Readers Module
Scene file readers exposing compositions through the core scene interface
"""

from pathlib import Path

from .base_reader import BaseReader
from .scene_description_reader import SceneDescriptionReader, KeyframedProperty

SCENE_DESCRIPTION_EXTENSIONS = {'.json'}

# Reader class per lowercase file extension
READERS = {ext: SceneDescriptionReader for ext in SCENE_DESCRIPTION_EXTENSIONS}
SUPPORTED_EXTENSIONS = set(READERS)


def create_reader(input_file) -> BaseReader:
    """Open a scene file with the reader registered for its extension

    Args:
        input_file: Path to the scene file

    Returns:
        BaseReader: Reader holding the parsed scene

    Raises:
        ValueError: If no reader handles the extension
        SceneReadError: If the file cannot be read or parsed
    """
    ext = Path(input_file).suffix.lower()
    reader_class = READERS.get(ext)
    if reader_class is None:
        raise ValueError(
            f"Unsupported file format: {ext or '(none)'}\n"
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )
    return reader_class(input_file)


def is_supported_format(input_file):
    """True if a reader is registered for the file's extension"""
    return Path(input_file).suffix.lower() in READERS


__all__ = [
    'BaseReader',
    'SceneDescriptionReader',
    'KeyframedProperty',
    'create_reader',
    'is_supported_format',
    'READERS',
    'SCENE_DESCRIPTION_EXTENSIONS',
    'SUPPORTED_EXTENSIONS',
]
