"""
Editor session tests

Tests render-then-save ordering, toolbar wrapping and document switching.
"""

import pytest

from quickmark.config import AppSettings
from quickmark.lib import DocumentStore, MemoryStore, Renderer, Session
from quickmark.lib.session import WRAPPERS, selection_wrap


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def store(settings):
    return DocumentStore.load(MemoryStore(), settings)


@pytest.fixture
def session(store, settings):
    return Session(store, Renderer(settings))


class TestSelectionWrap:
    """Test toolbar wrapping of a text selection"""

    def test_wrap_selection(self):
        assert selection_wrap("make this loud", 10, 14, "**", "**") == "make this **loud**"

    def test_wrap_cursor(self):
        assert selection_wrap("ab", 1, 1, "[", "]") == "a[]b"

    def test_toolbar_order(self):
        assert WRAPPERS[0] == ("**", "**")
        assert WRAPPERS[3] == ("# ", "")
        assert WRAPPERS[7] == ("![Enter Hover Text Here](", ")")


class TestSession:
    """Test the live preview loop"""

    def test_opens_with_rendered_document(self, session):
        assert "<h1>Heading 1</h1><hr>" in session.html

    def test_update_saves_after_render(self, session, store):
        html = session.text_update("Hello **there**")
        assert html == "<p>Hello <b>there</b></p>"
        assert store.file_get(store.curopen).content == "Hello **there**"

    def test_hooks_see_finished_render(self, settings):
        seen = []
        session = Session(DocumentStore(settings=settings), hooks=[lambda text: seen.append(session.html)])
        session.text_update("*x*")
        assert seen == ["<i>x</i>"]

    def test_update_persists_with_key_value_store(self, settings):
        kv = MemoryStore()
        store = DocumentStore.load(kv, settings)
        session = Session(store, Renderer(settings), kv=kv)
        session.text_update("Saved **now**")

        restored = DocumentStore.load(kv, settings)
        assert restored.curopen == "example"
        assert restored.file_get("example").content == "Saved **now**"

    def test_update_without_key_value_store_not_persisted(self, settings):
        kv = MemoryStore()
        session = Session(DocumentStore.load(kv, settings), Renderer(settings))
        session.text_update("only in memory")
        assert kv.get(settings.store_key) is None

    def test_nothing_persisted_without_open_document(self, settings):
        kv = MemoryStore()
        session = Session(DocumentStore(settings=settings), kv=kv)
        session.text_update("lost")
        assert kv.data == {}

    def test_update_without_open_document(self, settings):
        session = Session(DocumentStore(settings=settings))
        assert session.text_update("plain") == "<p>plain</p>"

    def test_toolbar_bold(self, session):
        session.text_update("bold text")
        assert session.toolbar_apply(0, 0, 4) == "<b>bold</b> text"
        assert session.text == "**bold** text"

    def test_toolbar_heading(self, session):
        session.text_update("Title")
        assert session.toolbar_apply(3, 0, 0) == "<h1>Title</h1><hr>"

    def test_toolbar_unknown_button(self, session):
        with pytest.raises(IndexError):
            session.toolbar_apply(42, 0, 0)

    def test_file_new_and_open(self, session, store):
        html = session.file_new()
        assert store.curopen == "file2"
        assert html == "<h1>file2</h1><hr>\n<p>Content...</p>"
        session.file_open("example")
        assert store.curopen == "example"

    def test_file_open_unknown(self, session):
        assert session.file_open("ghost") is None

    def test_file_delete_renders_next(self, session, store):
        session.file_new()
        html = session.file_delete("file2")
        assert store.curopen == "example"
        assert "<h1>Heading 1</h1><hr>" in html

    def test_help(self, session, store):
        assert "<h1>Tutorial</h1><hr>" in session.help_open()
        assert store.curopen == "Tutorial"
