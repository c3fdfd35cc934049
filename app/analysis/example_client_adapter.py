"""Offline completion client.

Returns a fixed, valid analysis for the document type named in the prompt.
Useful for local development and as a template for real provider adapters.
"""

import json
from typing import ClassVar

from app.analysis.client_base import BaseCompletionClient
from app.analysis.models import DocumentType
from app.analysis.schemas import FIELDS_BY_TYPE, GENERIC_FIELDS, SUBJECT_BY_TYPE


class ExampleClientAdapter(BaseCompletionClient):
    SUMMARY: ClassVar[str] = "Example analysis generated without calling an AI provider."

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt
        fields = GENERIC_FIELDS
        for doc_type in (DocumentType.CONTRACT, DocumentType.REPORT):
            if SUBJECT_BY_TYPE[doc_type] in user_prompt:
                fields = FIELDS_BY_TYPE[doc_type]
        response: dict[str, object] = {"summary": self.SUMMARY, "confidence": 0.5}
        response.update({name: [] for name in fields})
        return json.dumps(response)
