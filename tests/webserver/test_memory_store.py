"""Tests for the in-memory site store and path sanitising."""

import pytest

from blog_engine.webserver.memory import (
    DEFAULT_CONTENT_TYPE,
    FileData,
    MemoryStore,
    guess_content_type,
)
from blog_engine.webserver.paths import sanitize_path


@pytest.fixture
def webroot(tmp_path):
    root = tmp_path / "public"
    (root / "post" / "a").mkdir(parents=True)
    (root / "css").mkdir()
    (root / "empty").mkdir()
    (root / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    (root / "post" / "a" / "index.html").write_text("<h1>a</h1>", encoding="utf-8")
    (root / "css" / "site.css").write_text("body{}", encoding="utf-8")
    (root / "blob").write_bytes(b"\x00\x01")
    return root


class TestMemoryStoreLoad:
    def test_files_keyed_by_url(self, webroot):
        store = MemoryStore.load(webroot)
        assert "/index.html" in store
        assert "/post/a/index.html" in store
        assert "/css/site.css" in store
        assert "/blob" in store

    def test_directories_with_index(self, webroot):
        store = MemoryStore.load(webroot)
        assert "/" in store
        assert "/post/a/" in store
        assert "/css/" not in store
        assert "/empty/" not in store

    def test_content_types(self, webroot):
        store = MemoryStore.load(webroot)
        assert store.files["/index.html"].content_type == "text/html; charset=utf-8"
        assert store.files["/css/site.css"].content_type == "text/css; charset=utf-8"
        assert store.files["/blob"].content_type == DEFAULT_CONTENT_TYPE

    def test_missing_root(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MemoryStore.load(tmp_path / "missing")


class TestMemoryStoreLookup:
    def test_trailing_slash_serves_index(self, webroot):
        store = MemoryStore.load(webroot)
        assert store.lookup("/post/a/").content == b"<h1>a</h1>"

    def test_bare_directory_falls_back_to_index(self, webroot):
        store = MemoryStore.load(webroot)
        assert store.lookup("/post/a").content == b"<h1>a</h1>"

    def test_root(self, webroot):
        assert MemoryStore.load(webroot).lookup("/").content == b"<h1>home</h1>"

    def test_missing(self, webroot):
        store = MemoryStore.load(webroot)
        assert store.lookup("/nope") is None
        assert store.lookup("/css/") is None


class TestFileData:
    def test_etag_is_quoted_unix_time(self):
        data = FileData(content_type="text/plain", content=b"x")
        assert data.etag == f'"{int(data.mod_time.timestamp())}"'


class TestGuessContentType:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("page.html", "text/html; charset=utf-8"),
            ("logo.png", "image/png"),
            ("README", DEFAULT_CONTENT_TYPE),
        ],
    )
    def test_guess(self, name, expected):
        assert guess_content_type(name) == expected


class TestSanitizePath:
    def test_plain_path_unchanged(self):
        assert sanitize_path("/post/kafka-tuning/") == "/post/kafka-tuning/"

    def test_space_and_query_chars_escaped(self):
        assert sanitize_path("/a b?c=d") == "/a+b%3Fc%3Dd"

    def test_control_characters_escaped(self):
        result = sanitize_path("/evil\npath\r\t")
        assert "\n" not in result
        assert "\r" not in result
        assert "\t" not in result
        assert result == "/evil%0Apath%0D%09"
