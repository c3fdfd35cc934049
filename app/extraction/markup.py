"""Extractors for text-based formats: plain text, HTML and JSON."""

import html
import json
import re
from typing import ClassVar

from app.extraction.base import BaseFormatExtractor
from app.extraction.models import FormatExtraction

_RAW_JSON_PREVIEW_CHARS = 500


def _decode(content: bytes) -> tuple[str, list[str]]:
    try:
        return content.decode("utf-8"), []
    except UnicodeDecodeError:
        return (
            content.decode("utf-8", errors="replace"),
            ["Content is not valid UTF-8; undecodable bytes were replaced"],
        )


class PlainTextExtractor(BaseFormatExtractor):
    """Identity transform for plain text."""

    engine_name = "plain-text"

    def extract(self, content: bytes) -> FormatExtraction:
        text, warnings = _decode(content)
        return FormatExtraction(text=text, warnings=warnings)


class HtmlExtractor(BaseFormatExtractor):
    """Strips markup from HTML and returns the visible text."""

    engine_name = "html-strip"

    _HIDDEN_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"<(script|style|head)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL
    )
    _BLOCK_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"<(?:br|/p|/div|/li|/tr|/h[1-6])[^>]*>", re.IGNORECASE
    )
    _TAG_RE: ClassVar[re.Pattern[str]] = re.compile(r"<[^>]+>")
    _SPACES_RE: ClassVar[re.Pattern[str]] = re.compile(r"[ \t\r\f\v]+")

    def extract(self, content: bytes) -> FormatExtraction:
        markup, warnings = _decode(content)
        stripped = self._HIDDEN_RE.sub(" ", markup)
        stripped = self._BLOCK_RE.sub("\n", stripped)
        stripped = html.unescape(self._TAG_RE.sub(" ", stripped))
        lines = [self._SPACES_RE.sub(" ", line).strip() for line in stripped.splitlines()]
        return FormatExtraction(
            text="\n".join(line for line in lines if line), warnings=warnings
        )


class JsonExtractor(BaseFormatExtractor):
    """Pretty-prints JSON content.

    Invalid JSON is not fatal: the raw text (truncated) is returned with a warning.
    """

    engine_name = "json"

    def extract(self, content: bytes) -> FormatExtraction:
        raw, warnings = _decode(content)
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            preview = raw[:_RAW_JSON_PREVIEW_CHARS]
            if len(raw) > _RAW_JSON_PREVIEW_CHARS:
                preview += "..."
            return FormatExtraction(
                text=f"Raw content:\n{preview}",
                warnings=[*warnings, f"Error parsing JSON content: {exc}"],
            )
        pretty = json.dumps(parsed, indent=2, ensure_ascii=False)
        return FormatExtraction(text=f"Parsed JSON content:\n\n{pretty}", warnings=warnings)
