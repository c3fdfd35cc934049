import json

from app.analysis.analysis_client import AnalysisClient
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.models import DocumentType
from app.analysis.prompt_builder import AnalysisPromptBuilder
from app.analysis.schemas import CONTRACT_FIELDS, GENERIC_FIELDS, REPORT_FIELDS


def _respond(doc_type: DocumentType) -> dict[str, object]:
    prompt = AnalysisPromptBuilder().build(doc_type, "Title", "text")
    raw = ExampleClientAdapter().create_completion(
        model="m",
        temperature=0.1,
        system_prompt=prompt.system_prompt,
        user_prompt=prompt.user_prompt,
    )
    return json.loads(raw)


class TestExampleClientAdapter:
    def test_contract_response_has_contract_fields(self) -> None:
        data = _respond(DocumentType.CONTRACT)
        assert set(CONTRACT_FIELDS) <= set(data)
        assert data["confidence"] == 0.5

    def test_report_response_has_report_fields(self) -> None:
        assert set(REPORT_FIELDS) <= set(_respond(DocumentType.REPORT))

    def test_generic_response_has_generic_fields(self) -> None:
        assert set(GENERIC_FIELDS) <= set(_respond(DocumentType.POLICY))

    def test_response_passes_validation(self) -> None:
        client = AnalysisClient(client=ExampleClientAdapter(), model="example")
        prompt = AnalysisPromptBuilder().build(DocumentType.AGREEMENT, "Lease", "text")
        result = client.analyze(prompt)
        assert result.summary == ExampleClientAdapter.SUMMARY
