from __future__ import annotations


FENCE = "```"
FENCE_LANG = "html"


def _strip_opening_fence(text: str) -> str:
    body = text.lstrip()
    if not body.startswith(FENCE):
        return text
    body = body[len(FENCE):]
    if body[: len(FENCE_LANG)].lower() == FENCE_LANG:
        body = body[len(FENCE_LANG):]
    return body.lstrip()


def _strip_closing_fence(text: str) -> str:
    body = text.rstrip()
    if not body.endswith(FENCE):
        return text
    return body[: -len(FENCE)].rstrip()


def strip_code_fences(text: str) -> str:
    """
    Recover the HTML document from a model response.

    Models sometimes wrap their answer in a Markdown block (```html ... ```).
    The opening marker (bare or tagged ``html`` in any case) is removed first,
    then a closing marker, then surrounding whitespace. Text without fences is
    only trimmed. An empty answer stays empty; validating the HTML is up to
    the caller.

    Only one fence pair is removed per call. Output is stable under a second
    call unless the answer itself nested fences (```html\\n```\\n...), in
    which case the inner marker survives the first pass.
    """
    if not text:
        return ""
    body = _strip_opening_fence(text)
    body = _strip_closing_fence(body)
    return body.strip()
