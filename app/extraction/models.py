from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractionOptions:
    """Caller-supplied limits for one extraction."""

    max_content_length: int = 100_000
    include_metadata_footer: bool = False


@dataclass(frozen=True)
class FormatExtraction:
    """Text produced by a single format extractor."""

    text: str
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionOutcome:
    """Result of the extraction stage.

    ``failure_reason`` is set only when ``failed`` is true. ``duration_ms`` is
    informational and never drives pipeline decisions.
    """

    text: str
    canonical_mime: str
    warnings: list[str] = field(default_factory=list)
    failed: bool = False
    failure_reason: str | None = None
    duration_ms: float = 0.0

    @classmethod
    def failure(
        cls, reason: str, canonical_mime: str, duration_ms: float = 0.0
    ) -> "ExtractionOutcome":
        return cls(
            text="",
            canonical_mime=canonical_mime,
            failed=True,
            failure_reason=reason,
            duration_ms=duration_ms,
        )
