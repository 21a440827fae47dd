"""
Editor session: ties a document store to the renderer

The session re-renders the whole open document on every edit and only then
notifies its post-render hooks. The default hook saves the text into the
store and, when the session holds a key-value store, persists the whole
document list there.

Toolbar buttons are modelled as (prefix, suffix) pairs wrapped around the
current selection.
"""

from typing import Callable, List, Optional, Tuple

from .log import LOG
from .renderer import Renderer
from .store import DocumentStore, KeyValueStore


# Toolbar buttons in display order: bold, italic, strike, h1, h2, h3, link, image
WRAPPERS: Tuple[Tuple[str, str], ...] = (
    ("**", "**"),
    ("*", "*"),
    ("~~", "~~"),
    ("# ", ""),
    ("## ", ""),
    ("### ", ""),
    ("[Enter Caption Here](", ")"),
    ("![Enter Hover Text Here](", ")"),
)


def selection_wrap(text: str, start: int, end: int, prefix: str, suffix: str) -> str:
    """
    Wrap text[start:end] with prefix and suffix

    With an empty selection (start == end) the cursor position is wrapped.

    Example:
        >>> selection_wrap("make this loud", 10, 14, "**", "**")
        'make this **loud**'
    """
    return f"{text[:start]}{prefix}{text[start:end]}{suffix}{text[end:]}"


class Session:
    """
    Live preview session over a document store

    Attributes:
        store: Document store supplying and receiving raw text
        renderer: Renderer producing the preview
        text: Raw markdown currently in the editor
        html: Preview HTML of the last render
        hooks: Callables notified with the raw text after each render
        kv: Key-value store the documents are persisted to after each save
    """

    def __init__(
        self,
        store: DocumentStore,
        renderer: Optional[Renderer] = None,
        hooks: Optional[List[Callable[[str], object]]] = None,
        kv: Optional[KeyValueStore] = None,
    ) -> None:
        self.store = store
        self.renderer = renderer or Renderer()
        self.kv = kv
        self.hooks: List[Callable[[str], object]] = (
            hooks if hooks is not None else [self.document_save]
        )
        self.text = ""
        self.html = ""

        opened = store.file_get(store.curopen)
        if opened is not None:
            self.text_update(opened.content)

    def document_save(self, text: str) -> bool:
        """
        Save text into the open document, then persist the store if a
        key-value store is attached

        Returns:
            False if no document is open
        """
        saved = self.store.file_save(text)
        if saved and self.kv is not None:
            self.store.persist(self.kv)
        return saved

    def text_update(self, text: str) -> str:
        """
        Replace the editor text, render it and notify the hooks

        Returns:
            Preview HTML
        """
        self.text = text
        self.html = self.renderer.render(text)
        for hook in self.hooks:
            hook(text)
        return self.html

    def file_open(self, filename: str) -> Optional[str]:
        """
        Open a document from the store and render it

        Returns:
            Preview HTML, or None if the store has no such document
        """
        document = self.store.file_open(filename)
        if document is None:
            LOG(f"No document named '{filename}'", level=2)
            return None
        return self.text_update(document.content)

    def file_new(self) -> str:
        """Create a document with a generated name, open it and render it"""
        document = self.store.file_new()
        self.store.file_open(document.name)
        return self.text_update(document.content)

    def file_delete(self, filename: str) -> str:
        """Delete a document and render whichever document the store opens next"""
        self.store.file_delete(filename)
        opened = self.store.file_get(self.store.curopen)
        return self.text_update(opened.content if opened is not None else "")

    def help_open(self) -> str:
        """Open the tutorial document"""
        return self.text_update(self.store.help_open().content)

    def toolbar_apply(self, index: int, start: int, end: int) -> str:
        """
        Apply toolbar button ``index`` to the selection [start, end)

        Raises:
            IndexError: If there is no toolbar button with that index
        """
        prefix, suffix = WRAPPERS[index]
        return self.text_update(selection_wrap(self.text, start, end, prefix, suffix))
