"""
Models package for quickmark

Contains data structures for the rendering pipeline, the document store
and the CLI pipeline state.
"""

from .state import ProgramState, pipeline
from .rules import Rule, Stage
from .document import Document, StoreSnapshot

__all__ = [
    "ProgramState",
    "pipeline",
    "Rule",
    "Stage",
    "Document",
    "StoreSnapshot",
]
