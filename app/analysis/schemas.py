"""Per-document-type result fields requested from the analysis service.

Adding a document type or field is a change to these tables only.
"""

from app.analysis.models import DocumentType

CONTRACT_FIELDS: dict[str, str] = {
    "parties": "array of entities involved",
    "keyDates": "array of important dates with context",
    "financialTerms": "array of financial obligations",
    "keyObligations": "array of main responsibilities for each party",
    "riskFactors": "array of potential risks or contingencies",
    "recommendedActions": "array of suggested next steps",
}

REPORT_FIELDS: dict[str, str] = {
    "keyFindings": "array of main insights",
    "metrics": "array of important numerical data points",
    "trends": "array of identified patterns",
    "recommendations": "array of suggested actions",
}

GENERIC_FIELDS: dict[str, str] = {
    "keyInsights": "array of main points",
    "entities": "array of organizations or people mentioned",
    "topics": "array of main subjects covered",
}

FIELDS_BY_TYPE: dict[DocumentType, dict[str, str]] = {
    DocumentType.CONTRACT: CONTRACT_FIELDS,
    DocumentType.AGREEMENT: CONTRACT_FIELDS,
    DocumentType.REPORT: REPORT_FIELDS,
    DocumentType.POLICY: GENERIC_FIELDS,
    DocumentType.PRESENTATION: GENERIC_FIELDS,
    DocumentType.CORRESPONDENCE: GENERIC_FIELDS,
    DocumentType.INVOICE: GENERIC_FIELDS,
    DocumentType.OTHER: GENERIC_FIELDS,
}

_CONTRACT_SUBJECT = "Extract key parties, important dates, financial terms, and obligations."

SUBJECT_BY_TYPE: dict[DocumentType, str] = {
    DocumentType.CONTRACT: _CONTRACT_SUBJECT,
    DocumentType.AGREEMENT: _CONTRACT_SUBJECT,
    DocumentType.REPORT: "Extract key findings, metrics, trends, and recommendations.",
}
DEFAULT_SUBJECT = "Extract key information and insights."


def describe_fields(document_type: DocumentType) -> str:
    """Render the expected JSON fields as a bullet list for the prompt."""
    lines = ["- summary (concise 2-3 sentence overview)"]
    lines.extend(
        f"- {name} ({description})"
        for name, description in FIELDS_BY_TYPE[document_type].items()
    )
    lines.append("- confidence (number between 0-1 indicating analysis confidence)")
    return "\n".join(lines)
