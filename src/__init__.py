"""
quickmark - Small, order-dependent markdown dialect to HTML

Renders headings, emphasis, line breaks, paragraphs, links and images
through a fixed sequence of rewrite stages.
"""

__version__ = "1.0.0"

from .lib import Renderer, render, DocumentStore, Session, LOG, state_connectToLogger

__all__ = ["Renderer", "render", "DocumentStore", "Session", "LOG", "state_connectToLogger", "__version__"]
