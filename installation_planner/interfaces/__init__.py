"""
Interfaces module - adapters around the annotation core.

Image loading, GUI rendering and the printable report are collaborators
of the core, kept out of it so the engine stays toolkit-agnostic.
"""

from .gui_adapter import GUIAnnotationAdapter

__all__ = ['GUIAnnotationAdapter']
