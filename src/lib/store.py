"""
Document store for quickmark

Keeps an ordered list of uniquely named markdown documents, tracks which one
is open in the editor, and persists the list under a fixed key of a
key-value store.

The renderer never touches the store; the editor session saves the open
document after each successful render.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from pydantic import ValidationError

from ..config import AppSettings, appsettings
from ..models.document import Document, StoreSnapshot
from .log import LOG


WELCOME_TEXT = r"""# Heading 1
## Heading 2
### Heading 3

This is a **bold paragraph**, *italics* and ***bold italics***
still the same paragraph, just another line


This one is a different paragraph. In**SI**D*E* words work too

Here is another __bold__ and _italic_  text.

I want to write \* and then \* again and maybe \_

bold stars ** \*\*\*\_\_\*\*\_ ** and underscores

and here is a [link](https://en.wikipedia.org/wiki/Pembroke_Welsh_Corgi) about the Corgi and a picture of one

![corgi](https://i.imgur.com/nP3SZ0j.jpg)

He is ~~mean~~ nice, right?

struck ~~\~~~ tilde
"""

TUTORIAL_TEXT = """# Tutorial
## Toolbar

The first (hamburger) button opens the sidebar with your files
**B** wraps the selection (or the cursor) in bold markers
*I* wraps the selection in italic markers
~~S~~ strikes the selection through

H1, H2, H3 turn the line into a heading of that level
Link inserts a link, the format is [Visible text](target) with no space in between
IMG inserts an image, the format is ![Hover text](image url) with no space in between

## Sidebar

It holds four buttons: new file, rename the current file, delete the current file and **create this tutorial**

Below them is the list of all saved documents, click one to switch to it

Documents are saved on every change
"""


class StoreError(Exception):
    """Raised when a persisted document snapshot cannot be loaded"""
    pass


class KeyValueStore(Protocol):
    """Minimal string key-value storage used for persistence"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Key-value store held in a dict (nothing survives the process)"""

    def __init__(self) -> None:
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    Key-value store backed by a single JSON object on disk

    The file is read on every get() and rewritten on every set().
    """

    def __init__(self, path: Optional[Path] = None, settings: Optional[AppSettings] = None) -> None:
        """
        Args:
            path: JSON file to use; defaults to the configured store_path
            settings: Settings providing store_path
        """
        self.path = Path(path) if path is not None else Path((settings or appsettings).store_path)

    def data_read(self) -> Dict[str, str]:
        """
        Read the whole JSON object, empty if the file does not exist

        Raises:
            StoreError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except json.JSONDecodeError as e:
            raise StoreError(f"Failed to parse {self.path}: {e}")
        except Exception as e:
            raise StoreError(f"Failed to load {self.path}: {e}")
        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self.data_read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self.data_read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding='utf-8')


class DocumentStore:
    """
    Ordered collection of uniquely named documents

    Attributes:
        curopen: Name of the document open in the editor, if any
    """

    def __init__(
        self,
        files: Optional[List[Document]] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Create a store, importing previously persisted documents

        Args:
            files: Documents to import; names are de-duplicated on import
            settings: Settings providing the new-document template
        """
        self.settings = settings or appsettings
        self._files: List[Document] = []
        self.curopen: Optional[str] = None
        for file in files or []:
            document = self.file_new(file.name, file.content, file.open)
            if document.open:
                self.curopen = document.name

    @property
    def filenames(self) -> List[str]:
        """Names of all documents, in creation order"""
        return [file.name for file in self._files]

    @property
    def files(self) -> List[Document]:
        """All documents, in creation order"""
        return list(self._files)

    def name_isFree(self, name: str) -> bool:
        """Check if no document uses this name yet"""
        return name not in self.filenames

    def freeName_get(self) -> str:
        """
        Generate an unused document name

        Starts from file<N+1> where N is the number of documents, appending
        '1' until the name is free.

        Example:
            With documents ["file1", "file2"]: returns "file3"
            With documents ["a", "file2"]: returns "file21"
        """
        name = f"file{len(self._files) + 1}"
        while not self.name_isFree(name):
            name = name + "1"
        return name

    def file_new(
        self, name: Optional[str] = None, content: Optional[str] = None, open: bool = False
    ) -> Document:
        """
        Create a document and append it to the store

        Args:
            name: Desired name; replaced by a generated one if missing or taken
            content: Markdown content; empty content uses the new-file template
            open: Initial open flag

        Returns:
            The created Document
        """
        nm = name if name and self.name_isFree(name) else self.freeName_get()
        document = Document(
            name=nm,
            content=content if content else self.settings.newContent_make(nm),
            open=open,
        )
        self._files.append(document)
        LOG(f"Created document '{nm}'", level=2)
        return document

    def file_get(self, filename: Optional[str]) -> Optional[Document]:
        """Get a document by name, None if not found"""
        for file in self._files:
            if file.name == filename:
                return file
        return None

    def file_rename(self, oldname: str, newname: str) -> bool:
        """
        Rename an existing document

        Returns:
            True if renamed; False if oldname is unknown or newname is taken
        """
        document = self.file_get(oldname)
        if document is None or not self.name_isFree(newname):
            return False
        document.name = newname
        if self.curopen == oldname:
            self.curopen = newname
        LOG(f"Renamed '{oldname}' to '{newname}'", level=2)
        return True

    def file_open(self, filename: Optional[str]) -> Optional[Document]:
        """
        Open a document, closing the one previously open

        Returns:
            The opened Document, or None if no document has that name
        """
        document = self.file_get(filename)
        if document is None:
            return None
        previous = self.file_get(self.curopen)
        if previous is not None:
            previous.open = False
        document.open = True
        self.curopen = document.name
        return document

    def file_save(self, content: str) -> bool:
        """
        Store new content into the open document

        Returns:
            False if no document is open
        """
        document = self.file_get(self.curopen)
        if document is None:
            LOG("No file to save", level=1)
            return False
        document.content = content
        return True

    def file_delete(self, filename: str) -> bool:
        """
        Delete a document

        Opens the first remaining document afterwards; deleting the last one
        creates and opens the 'example' document.

        Returns:
            False if no document has that name
        """
        document = self.file_get(filename)
        if document is None:
            return False
        self._files.remove(document)
        if self.curopen == filename:
            self.curopen = None
        if self._files:
            self.file_open(self._files[0].name)
        else:
            self.file_new("example", WELCOME_TEXT)
            self.file_open("example")
        LOG(f"Deleted document '{filename}'", level=2)
        return True

    def help_open(self) -> Document:
        """Create and open a tutorial document"""
        document = self.file_new("Tutorial", TUTORIAL_TEXT)
        self.file_open(document.name)
        return document

    def snapshot_make(self) -> StoreSnapshot:
        """Capture every document for persistence"""
        return StoreSnapshot(files=[file.model_copy() for file in self._files])

    def persist(self, kv: KeyValueStore) -> None:
        """Write all documents under the configured store key"""
        kv.set(self.settings.store_key, self.snapshot_make().model_dump_json())
        LOG(f"Persisted {len(self._files)} documents", level=2)

    @classmethod
    def load(
        cls, kv: KeyValueStore, settings: Optional[AppSettings] = None
    ) -> "DocumentStore":
        """
        Restore a store from a key-value store

        When nothing is persisted yet, the store starts with the 'example'
        document open. Otherwise the previously open document is reopened.

        Raises:
            StoreError: If the persisted snapshot is not valid
        """
        settings = settings or appsettings
        cached = kv.get(settings.store_key)
        if not cached:
            store = cls(settings=settings)
            store.file_new("example", WELCOME_TEXT)
            store.file_open("example")
            return store

        try:
            snapshot = StoreSnapshot.model_validate_json(cached)
        except ValidationError as e:
            raise StoreError(f"Invalid document snapshot: {e}")

        store = cls(snapshot.files, settings=settings)
        if store.curopen is None and store.filenames:
            store.file_open(store.filenames[0])
        LOG(f"Loaded {len(store.filenames)} documents", level=2)
        return store
