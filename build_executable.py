#!/usr/bin/env python3
"""
Build script for creating standalone executables using PyInstaller
Bundles the tracking data exporter GUI (default) or the command line tool
"""

import PyInstaller.__main__
import argparse
import sys

from tracking_exporter import VERSION

HIDDEN_IMPORTS = [
    'tracking_exporter',
    # Readers module
    'readers',
    'readers.base_reader',
    'readers.scene_description_reader',
    # Core module
    'core.collector',
    'core.errors',
    'core.feature_samplers',
    'core.frame_sampler',
    'core.geometry',
    'core.scene_interface',
    'core.tracking_data',
    # Exporters module
    'exporters.base_exporter',
    'exporters.json_exporter',
    'numpy',
]


def build_args(console=False):
    """PyInstaller arguments for the GUI or the console build

    Args:
        console: True to bundle tde.py as a console program

    Returns:
        tuple: (argument list, executable name)
    """
    base_name = 'TrackingDataExporterCLI' if console else 'TrackingDataExporter'
    exe_name = base_name + '.exe' if sys.platform.startswith('win') else base_name

    args = [
        'tde.py' if console else 'tde_gui.py',
        '--name=' + base_name,
        '--onefile',  # Single executable file
        '--console' if console else '--windowed',
        '--clean',
        '--noconfirm',
    ]
    args += ['--hidden-import=' + module for module in HIDDEN_IMPORTS]
    return args, exe_name


def build(console=False):
    """Build standalone executable"""
    args, exe_name = build_args(console)

    print("=" * 50)
    print(f"Building Standalone Executable v{VERSION}")
    print("=" * 50)
    print(f"Platform: {sys.platform}")
    print(f"Output: {exe_name}")
    print("=" * 50)

    try:
        PyInstaller.__main__.run(args)

        print("\n" + "=" * 50)
        print("Build Complete!")
        print("=" * 50)

        if sys.platform.startswith('win'):
            print(f"\nExecutable location: dist\\{exe_name}")
        else:
            print(f"\nExecutable location: dist/{exe_name}")

    except Exception as e:
        print(f"\nBuild failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Build a standalone tracking data exporter')
    parser.add_argument('--console', action='store_true',
                        help='Bundle the command line tool instead of the GUI')
    build(parser.parse_args().console)
