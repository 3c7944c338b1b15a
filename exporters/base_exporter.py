#!/usr/bin/env python3
"""
Base Exporter Module
Common interface for writers of collected tracking data

Exporters receive a finished CompositionRecord and only handle
serialization and file output; they never read the source scene.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.tracking_data import CompositionRecord


class BaseExporter(ABC):
    """Abstract base class for tracking data exporters

    Subclasses write one CompositionRecord to one output file and report
    the outcome as a result dict instead of raising.
    """

    def __init__(self, progress_callback=None):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
        """
        self.progress_callback = progress_callback

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    @abstractmethod
    def export(self, record: 'CompositionRecord', output_path):
        """Write a composition record

        Args:
            record: Fully collected CompositionRecord
            output_path: Target file (Path object or string)

        Returns:
            dict: At least 'success' (bool), 'files' (list of written paths)
                  and 'message' (str)
        """

    @abstractmethod
    def get_format_name(self):
        """Human-readable format name, e.g. 'Tracking Data JSON'"""

    @abstractmethod
    def get_file_extension(self):
        """File extension without the dot, e.g. 'json'"""

    def validate_output_path(self, output_path):
        """Check the target file path and create its parent directory

        Args:
            output_path: Target file path

        Returns:
            Path: Target as a Path object

        Raises:
            ValueError: If the path is a directory or its parent cannot be created
        """
        path = Path(output_path)

        if path.is_dir():
            raise ValueError(f"Output path is a directory, expected a file: {path}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValueError(f"Cannot create output directory {path.parent}: {e}")

        return path

    def get_export_summary(self, result):
        """One block of text describing an export result

        Args:
            result: Result dict returned by export()

        Returns:
            str: Status line followed by written files and the message
        """
        status = "✓" if result.get('success') else "✗"
        outcome = "Export Complete" if result.get('success') else "Export Failed"
        lines = [f"{status} {self.get_format_name()} {outcome}"]

        for file_path in result.get('files', []):
            lines.append(f"    - {Path(file_path).name}")

        if result.get('message'):
            lines.append(f"  {result['message']}")

        return "\n".join(lines)
