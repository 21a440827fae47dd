"""
quickmark - Small, order-dependent markdown dialect to HTML

Rendering pipeline, document store and editor session.
"""

__version__ = "1.0.0"

from .renderer import Renderer, render
from .stages import stages_build, STAGE_ORDER
from .store import DocumentStore, StoreError, JsonFileStore, MemoryStore
from .session import Session
from .log import LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "render",
    "stages_build",
    "STAGE_ORDER",
    "DocumentStore",
    "StoreError",
    "JsonFileStore",
    "MemoryStore",
    "Session",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
