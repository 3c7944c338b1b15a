#!/usr/bin/env python3
"""
Base Reader Module
Abstract interface for reading scene files that hold compositions
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from core.errors import NoActiveSceneError
from core.scene_interface import CompositionSource, ProjectSource


class BaseReader(ABC):
    """Abstract base class for scene file readers

    Provides a consistent interface for reading different scene formats.
    Every reader exposes its content as a core.scene_interface.ProjectSource
    so the collectors can sample it without knowing the file format.
    """

    def __init__(self, file_path):
        """Initialize reader with file path

        Args:
            file_path: Path to the scene file
        """
        self.file_path = Path(file_path)
        self._compositions_cache = None

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., 'Scene Description JSON')"""
        pass

    @abstractmethod
    def get_project(self) -> ProjectSource:
        """Get the project read from the file

        Returns:
            ProjectSource: Project with all compositions
        """
        pass

    def get_compositions(self) -> List[CompositionSource]:
        """Get all compositions of the project (cached)

        Returns:
            list: CompositionSource objects in project order
        """
        if self._compositions_cache is None:
            self._compositions_cache = list(self.get_project().get_compositions())
        return self._compositions_cache

    def get_composition_names(self) -> List[str]:
        """Get the names of all compositions, e.g. for a selection list

        Returns:
            list: Composition names in project order
        """
        return [comp.name for comp in self.get_compositions()]

    def find_composition(self, selector: Union[str, int, None] = None) -> CompositionSource:
        """Select a composition by name or 1-based index

        Args:
            selector: Composition name, 1-based index (int or digit string),
                      or None for the first composition

        Returns:
            CompositionSource: Selected composition

        Raises:
            NoActiveSceneError: If the project holds no compositions
            KeyError: If no composition matches the selector
        """
        compositions = self.get_compositions()
        if not compositions:
            raise NoActiveSceneError(f"No compositions found in {self.file_path.name}")

        if selector is None:
            return compositions[0]

        for comp in compositions:
            if comp.name == selector:
                return comp

        if isinstance(selector, int) or (isinstance(selector, str) and selector.isdigit()):
            index = int(selector)
            if 1 <= index <= len(compositions):
                return compositions[index - 1]

        raise KeyError(
            f"Composition not found: {selector}\n"
            f"Available compositions: {', '.join(self.get_composition_names())}"
        )
