#!/usr/bin/env python3
"""
Tracking Data Exporter - Main Orchestrator Module
Coordinates reading a scene, collecting tracking data and writing it out

Readers expose the scene through the core scene interface, the collector
samples every layer of the selected composition into a CompositionRecord,
and the exporter writes that record to disk.
"""

from pathlib import Path

from core.collector import TrackingDataCollector
from core.feature_samplers import CORNER_PIN_EFFECT, PUPPET_EFFECT
from core.scene_interface import SCENE_INTERFACE_VERSION
from exporters.json_exporter import JSONExporter
from readers import create_reader

SCRIPT_NAME = "Advanced Tracking Data Export"
VERSION = "1.0.0"


def default_output_path(input_file):
    """Default JSON path for a scene file: <stem>_tracking.json beside it"""
    path = Path(input_file)
    return path.with_name(f"{path.stem}_tracking.json")


class TrackingDataExporter:
    """Tracking data export orchestrator/facade

    This class coordinates the export process:
    1. Read input scene ONCE (via readers module)
    2. Select the composition to export
    3. Collect per-frame transform and tracking data (via core collector)
    4. Write the record (via JSON exporter)

    Any failure is reported as a single unsuccessful result; no partial
    output file is written.
    """

    def __init__(self, progress_callback=None, corner_pin_effect=CORNER_PIN_EFFECT,
                 puppet_effect=PUPPET_EFFECT):
        """Initialize exporter

        Args:
            progress_callback: Optional function to call for progress updates
                              Signature: callback(message: str) -> None
            corner_pin_effect: Name of the corner pin effect to look for
            puppet_effect: Name of the puppet effect to look for
        """
        self.progress_callback = progress_callback
        self.corner_pin_effect = corner_pin_effect
        self.puppet_effect = puppet_effect

    def log(self, message):
        """Send progress updates to callback"""
        if self.progress_callback:
            self.progress_callback(message)
        print(message)

    def list_compositions(self, input_file):
        """List composition names of a scene file

        Args:
            input_file: Path to scene file

        Returns:
            list: Composition names in project order
        """
        reader = create_reader(input_file)
        return reader.get_composition_names()

    def collect(self, input_file, composition=None):
        """Read a scene file and collect one composition

        Args:
            input_file: Path to scene file
            composition: Composition name or 1-based index (None = first)

        Returns:
            CompositionRecord: Collected tracking data

        Raises:
            NoActiveSceneError: If the scene holds no compositions
            SceneReadError: If the scene cannot be read or sampled
            KeyError: If the composition does not exist
        """
        reader = create_reader(input_file)
        self.log(f"Reader: {reader.get_format_name()} (scene interface v{SCENE_INTERFACE_VERSION})")
        comp = reader.find_composition(composition)
        collector = TrackingDataCollector(
            progress_callback=self.progress_callback,
            corner_pin_effect=self.corner_pin_effect,
            puppet_effect=self.puppet_effect
        )
        return collector.collect(comp)

    def export(self, input_file, output_file=None, composition=None, indent=2, precision=None):
        """Export tracking data of one composition to JSON

        This is the main entry point used by the command line and GUI.

        Args:
            input_file: Path to scene file
            output_file: Target JSON path (None = <stem>_tracking.json beside input)
            composition: Composition name or 1-based index (None = first)
            indent: JSON indentation width
            precision: Decimal places kept for floats, None for full precision

        Returns:
            dict: Results with keys:
                - 'success': bool
                - 'json_file': Path to written JSON (on success)
                - 'composition': Exported composition name (on success)
                - 'message': Summary message
        """
        try:
            if output_file is None:
                output_file = default_output_path(input_file)

            self.log(f"\n{'='*60}")
            self.log(f"{SCRIPT_NAME} v{VERSION}")
            self.log(f"{'='*60}")
            self.log(f"Input: {input_file}")
            self.log(f"Output: {output_file}")
            self.log(f"{'='*60}\n")

            # Step 1: Read scene and collect all frames
            self.log("Step 1/2: Collecting tracking data...")
            record = self.collect(input_file, composition)

            # Step 2: Write
            self.log("\nStep 2/2: Writing JSON...")
            exporter = JSONExporter(self.progress_callback, indent=indent, precision=precision)
            result = exporter.export(record, output_file)

            self.log(f"\n{exporter.get_export_summary(result)}")
            self.log(f"{'='*60}\n")

            if not result.get('success'):
                return result

            result['composition'] = record.name
            result['message'] = f"Tracking data exported successfully! {result['message']}"
            return result

        except Exception as e:
            self.log(f"\nERROR: {str(e)}")
            import traceback
            self.log(traceback.format_exc())
            return {
                'success': False,
                'message': f"Export failed: {str(e)}"
            }
