#!/usr/bin/env python3
"""
Errors Module
Exception types raised while reading a scene for tracking data export.

Absent optional features (tracker, mesh warp, corner pin, puppet pins) are
never errors; they show up as None or empty lists in the records.
"""


class SceneReadError(RuntimeError):
    """A required scene value could not be resolved

    Raised by the scene source when a transform property, the transform
    matrix, the duration or the frame rate is missing or unreadable.
    Propagates through the collectors and aborts the whole export.
    """

    def __init__(self, message, owner=None, property_name=None):
        super().__init__(message)
        self.owner = owner
        self.property_name = property_name


class NoActiveSceneError(ValueError):
    """No scene or composition is available to export"""
    pass
