#!/usr/bin/env python3
"""
Exporters Module
Writers persisting collected tracking records
"""

from .base_exporter import BaseExporter
from .json_exporter import JSONExporter, load_composition_record, prepare_for_json

__all__ = [
    'BaseExporter',
    'JSONExporter',
    'load_composition_record',
    'prepare_for_json',
]
