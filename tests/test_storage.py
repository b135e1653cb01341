import pytest

from html_translate import storage


def test_write_text_creates_parents_and_keeps_line_endings(tmp_path):
    out = tmp_path / "a" / "b" / "out.html"
    storage.write_text(out, "<p>x</p>\r\n<p>y</p>")
    assert out.read_bytes() == b"<p>x</p>\r\n<p>y</p>"


def test_read_text_returns_file_content_unchanged(tmp_path):
    src = tmp_path / "in.html"
    src.write_bytes("<p>Merhaba dünya</p>\r\n".encode("utf-8"))
    assert storage.read_text(src) == "<p>Merhaba dünya</p>\r\n"


def test_read_text_rejects_non_utf8(tmp_path):
    src = tmp_path / "in.html"
    src.write_bytes("<p>Çalışma</p>".encode("cp1254"))
    with pytest.raises(UnicodeDecodeError):
        storage.read_text(src)


def test_read_text_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        storage.read_text(tmp_path / "nope.html")


def test_read_json(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text('{"languages": {"default_target": "de"}}', encoding="utf-8")
    assert storage.read_json(cfg) == {"languages": {"default_target": "de"}}
