import pytest

from html_translate.postproc import strip_code_fences


@pytest.mark.parametrize(
    "raw",
    [
        "```html\n<p>x</p>\n```",
        "```\n<p>x</p>\n```",
        "```HTML\n<p>x</p>\n```",
        "  \n```html  \n<p>x</p>\n```\n",
        "  <p>x</p>  ",
    ],
)
def test_strip_code_fences_recovers_html(raw):
    assert strip_code_fences(raw) == "<p>x</p>"


def test_strip_code_fences_is_idempotent():
    once = strip_code_fences("```html\n<div>\n  <p>Hallo</p>\n</div>\n```")
    assert once == "<div>\n  <p>Hallo</p>\n</div>"
    assert strip_code_fences(once) == once


def test_strip_code_fences_keeps_inner_content_verbatim():
    body = "<pre>a  b\r\n\tc</pre>"
    assert strip_code_fences(f"```html\n{body}\n```") == body


def test_strip_code_fences_empty_answers_stay_empty():
    assert strip_code_fences("") == ""
    assert strip_code_fences("   \n ") == ""
    assert strip_code_fences("```html\n```") == ""


def test_strip_code_fences_removes_a_single_pair_only():
    nested = "```html\n```\n<p>x</p>\n```"
    once = strip_code_fences(nested)
    assert once == "```\n<p>x</p>"
    assert strip_code_fences(once) == "<p>x</p>"
