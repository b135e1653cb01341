from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString
from openai import AuthenticationError, OpenAI, OpenAIError

from .languages import LanguageSpec
from .postproc import strip_code_fences
from .utils import sha1_text


GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
API_KEY_ENV = "GEMINI_API_KEY"
API_KEY_URL = "https://aistudio.google.com/app/apikey"

PAYLOAD_HEADER = "HTML to translate:"

PROMPT_TEMPLATE = """\
You are an expert {source}→{target} translator for HTML emails.

Translate the following HTML from {source} to {target} while preserving the HTML exactly.

Rules:
1. Source is {source}; output MUST be {target} only.
2. Preserve ALL HTML: tags, attributes, classes, ids, inline styles, and structure.
3. Translate EVERY visible text node: headings, paragraphs, list items, table cell text, labels (e.g., From, Date, Subject, To, Cc), summary/details content, button text, form placeholders, and any user-facing attribute values (title="", alt="", placeholder="").
4. Do NOT translate URLs, email addresses, brand names, proper nouns, or protocol/technical header keys (e.g., ARC-Seal, x-gm-thrid, message-id). Leave <script> and <style> contents unchanged.
5. Keep punctuation, capitalization, numbers, spacing, line breaks, and indentation aligned with the original. Do not paraphrase, shorten, or summarize.
6. If some segments are already in a language other than {source} (e.g., English technical tokens), preserve them unless they are UI labels as in rule 3.
7. Ensure 100% coverage: no {source} words should remain anywhere in the visible output.

Return ONLY the translated HTML: no explanations, no markdown, no code fences.

{payload_header}

{html}"""


class MissingApiKeyError(RuntimeError):
    """Raised when a required provider API key is missing."""


class ProviderError(RuntimeError):
    """Raised when the remote model call fails (auth, network, quota, model name)."""

    @property
    def is_credential_error(self) -> bool:
        if isinstance(self.__cause__, AuthenticationError):
            return True
        return "api key" in str(self).lower()


@dataclass(frozen=True)
class TranslationRequest:
    source_language: LanguageSpec
    target_language: LanguageSpec
    html_body: str


@dataclass(frozen=True)
class TranslationResult:
    raw_model_text: str
    normalized_html: str

    @classmethod
    def from_raw(cls, raw_model_text: str) -> "TranslationResult":
        return cls(raw_model_text=raw_model_text, normalized_html=strip_code_fences(raw_model_text))


def build_prompt(request: TranslationRequest) -> str:
    """Frame the HTML body with the translation rules for the model."""
    return PROMPT_TEMPLATE.format(
        source=request.source_language.name,
        target=request.target_language.name,
        payload_header=PAYLOAD_HEADER,
        html=request.html_body,
    )


def extract_payload(prompt: str) -> str:
    _, sep, payload = prompt.partition(PAYLOAD_HEADER + "\n\n")
    return payload if sep else ""


class BaseTranslator(Protocol):
    def complete(self, prompt: str) -> str:
        ...


@dataclass
class TranslatorConfig:
    model: str = "gemini-2.5-flash"
    temperature: Optional[float] = 0.3
    max_output_tokens: Optional[int] = None
    base_url: str = GEMINI_OPENAI_BASE_URL


class GeminiTranslator:
    """
    Gemini translator reached through its OpenAI-compatible endpoint.

    Requires:
      - `openai` python package
      - a GEMINI_API_KEY, resolved by the caller and passed in.
    """

    def __init__(self, api_key: str, cfg: Optional[TranslatorConfig] = None, client: Optional[Any] = None):
        self.api_key = (api_key or "").strip()
        if not self.api_key:
            raise MissingApiKeyError(f"{API_KEY_ENV} environment variable is not set")
        self.cfg = cfg or TranslatorConfig()
        self._client = client or OpenAI(api_key=self.api_key, base_url=self.cfg.base_url)

    def complete(self, prompt: str) -> str:
        params: dict[str, Any] = {
            "model": self.cfg.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        # Unset knobs fall back to the provider defaults
        if self.cfg.temperature is not None:
            params["temperature"] = self.cfg.temperature
        if self.cfg.max_output_tokens is not None:
            params["max_tokens"] = self.cfg.max_output_tokens

        try:
            resp = self._client.chat.completions.create(**params)
        except OpenAIError as exc:
            raise ProviderError(str(exc)) from exc

        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""


class DummyTranslator:
    """Offline translator for dry runs. Tags text nodes instead of translating them."""

    def __init__(self, target_code: str = "xx"):
        self.marker = f"[{target_code}] "

    def complete(self, prompt: str) -> str:
        soup = BeautifulSoup(extract_payload(prompt), "html.parser")
        for node in soup.find_all(string=True):
            if not isinstance(node, NavigableString) or isinstance(node, (Comment, Doctype)):
                continue
            if node.parent is not None and node.parent.name in ("script", "style"):
                continue
            txt = str(node)
            if txt.strip():
                node.replace_with(self.marker + txt)
        # Answer the way chat models tend to: inside a fenced block
        return f"```html\n{soup}\n```"


def build_translator(
    provider: str,
    cfg: TranslatorConfig,
    api_key: str = "",
    target_code: str = "xx",
) -> BaseTranslator:
    provider = provider.lower()
    if provider == "gemini":
        return GeminiTranslator(api_key=api_key, cfg=cfg)
    if provider == "dummy":
        return DummyTranslator(target_code=target_code)
    raise ValueError(f"Unknown translation provider: {provider}")


def translate_request(
    request: TranslationRequest,
    translator: BaseTranslator,
    logger: Optional[logging.Logger] = None,
) -> TranslationResult:
    """Build the prompt, make the single model call and normalize the answer."""

    prompt = build_prompt(request)
    if logger:
        logger.debug(
            "Prompt built (chars=%s, html_chars=%s, sha1=%s)",
            len(prompt),
            len(request.html_body),
            sha1_text(prompt),
        )

    raw = translator.complete(prompt)
    result = TranslationResult.from_raw(raw)

    if logger:
        logger.debug(
            "Model answered (chars=%s, normalized_chars=%s)",
            len(result.raw_model_text),
            len(result.normalized_html),
        )
        if not result.normalized_html:
            logger.warning("Model returned an empty translation.")
    return result
