class ExtractionError(Exception):
    """Raised by a format extractor when content cannot be decoded."""
