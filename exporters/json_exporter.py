#!/usr/bin/env python3
"""
JSON Exporter Module
Writes composition tracking records as indented JSON documents
"""

import json
import math
import os
from pathlib import Path

from core.tracking_data import CompositionRecord

from .base_exporter import BaseExporter


def prepare_for_json(value, precision=None):
    """Make a record dict safe for strict JSON output

    NaN and infinite floats (from degenerate transform matrices) become
    None. With a precision, floats are rounded to that many decimals.

    Args:
        value: Output of CompositionRecord.to_dict() or any nested part of it
        precision: Decimal places to keep, None for full precision

    Returns:
        Same structure with floats cleaned
    """
    if isinstance(value, dict):
        return {key: prepare_for_json(item, precision) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [prepare_for_json(item, precision) for item in value]
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if precision is not None:
            return round(value, precision)
    return value


def load_composition_record(json_file):
    """Read an exported tracking document back into a record

    Args:
        json_file: Path to a file written by JSONExporter

    Returns:
        CompositionRecord
    """
    with open(json_file, 'r', encoding='utf-8') as f:
        return CompositionRecord.from_dict(json.load(f))


class JSONExporter(BaseExporter):
    """Tracking data exporter producing one JSON document per composition

    The document is written to a temporary file next to the target and
    moved into place only once fully written, so a failed export never
    leaves a partial file behind.
    """

    def __init__(self, progress_callback=None, indent=2, precision=None):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
            indent: JSON indentation width, None for compact output
            precision: Decimal places kept for floats, None for full precision
        """
        super().__init__(progress_callback)
        self.indent = indent
        self.precision = precision

    def get_format_name(self):
        return "Tracking Data JSON"

    def get_file_extension(self):
        return "json"

    def to_json(self, record):
        """Serialize a record to a JSON string

        Args:
            record: CompositionRecord to serialize

        Returns:
            str: JSON document
        """
        data = prepare_for_json(record.to_dict(), self.precision)
        return json.dumps(data, indent=self.indent, ensure_ascii=False, allow_nan=False)

    def export(self, record, output_path):
        """Export to a JSON file

        Args:
            record: CompositionRecord to write
            output_path: Target .json file path

        Returns:
            dict: Export results with keys:
                - 'success': bool
                - 'json_file': Path to created JSON file
                - 'files': List of created file paths
                - 'message': Status message
        """
        temp_file = None
        try:
            json_file = self.validate_output_path(output_path)
            text = self.to_json(record)

            temp_file = json_file.with_name(json_file.name + '.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(temp_file, json_file)
            temp_file = None

            frame_count = record.frames_per_layer
            self.log(f"✓ JSON written to: {json_file}")
            self.log(f"✓ Layers: {len(record.layers)}")
            self.log(f"✓ Frames per layer: {frame_count}")
            self.log(f"✓ Duration: {record.duration}s @ {record.frame_rate} fps")

            return {
                'success': True,
                'json_file': str(json_file),
                'files': [str(json_file)],
                'message': f"Exported {len(record.layers)} layers x {frame_count} frames"
            }

        except Exception as e:
            self.log(f"ERROR: {str(e)}")
            import traceback
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': f"Export failed: {str(e)}",
                'files': []
            }

        finally:
            if temp_file is not None and Path(temp_file).exists():
                Path(temp_file).unlink()
