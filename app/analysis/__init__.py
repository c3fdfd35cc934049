from app.analysis.analysis_client import AnalysisClient
from app.analysis.factory import AnalysisClientFactory
from app.analysis.models import AnalysisResult, DocumentType, Prompt
from app.analysis.prompt_builder import AnalysisPromptBuilder

__all__ = [
    "AnalysisClient",
    "AnalysisClientFactory",
    "AnalysisPromptBuilder",
    "AnalysisResult",
    "DocumentType",
    "Prompt",
]
