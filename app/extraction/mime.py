"""Canonical MIME types and tolerant normalization of uploaded MIME strings."""

PDF = "application/pdf"
WORD = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SPREADSHEET = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PRESENTATION = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
HTML = "text/html"
JSON = "application/json"
PLAIN_TEXT = "text/plain"

CANONICAL_TYPES = frozenset({PDF, WORD, SPREADSHEET, PRESENTATION, HTML, JSON, PLAIN_TEXT})

# Order matters: "text/html" must hit HTML before the generic "text/" rule,
# and spreadsheet/presentation aliases are checked before the broad "doc" alias.
_ALIASES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("pdf",), PDF),
    (("excel", "xls", "spreadsheet"), SPREADSHEET),
    (("powerpoint", "ppt", "presentation"), PRESENTATION),
    (("word", "doc"), WORD),
    (("html",), HTML),
    (("json",), JSON),
    (("text/", "txt"), PLAIN_TEXT),
)


def normalize_mime_type(raw_mime_type: str) -> str:
    """Map a free-form MIME string to a canonical type.

    Matching is case-insensitive and alias based. Unrecognized values are
    returned unchanged and treated as unsupported by the extractor.
    """
    lowered = raw_mime_type.strip().lower()
    base = lowered.split(";", 1)[0].strip()
    if base in CANONICAL_TYPES:
        return base
    for aliases, canonical in _ALIASES:
        if any(alias in base for alias in aliases):
            return canonical
    return raw_mime_type
