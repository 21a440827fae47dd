"""
Document store models

Pydantic models for markdown documents as they are persisted by the
document store.
"""

from typing import List

from pydantic import BaseModel, Field


class Document(BaseModel):
    """
    A named markdown document

    Attributes:
        name: Unique document name within the store
        content: Raw markdown text
        open: Whether the document is currently open in the editor
    """
    name: str
    content: str = ""
    open: bool = False


class StoreSnapshot(BaseModel):
    """Persisted form of the whole store: every document, in order"""
    files: List[Document] = Field(default_factory=list)
