"""Drives one document from PENDING/QUEUED to a terminal status.

Pipeline: load -> extract -> build prompt -> analyze -> persist.
Stages run strictly in sequence. Stage failures become FAILED records;
only status-store faults and unexpected errors propagate to the caller.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from pathlib import Path

from app.analysis.analysis_client import AnalysisClient
from app.analysis.exceptions import AnalysisError, ExternalServiceError, InvalidDocumentTypeError
from app.analysis.factory import AnalysisClientFactory
from app.analysis.models import AnalysisResult, Prompt
from app.analysis.prompt_builder import AnalysisPromptBuilder
from app.config.settings import Settings
from app.database.repositories.documents_repository import DocumentsRepository
from app.database.repositories.processing_records_repository import PostgresStatusStore
from app.extraction.factory import TextExtractorFactory
from app.extraction.mime import normalize_mime_type
from app.extraction.models import ExtractionOptions, ExtractionOutcome
from app.extraction.text_extractor import TextExtractor
from app.logging.logger import Log
from app.pipeline.documents import BaseDocumentsRepository
from app.pipeline.exceptions import ContentUnavailableError
from app.pipeline.models import Document
from app.pipeline.storage import BaseContentStorage, LocalContentStorage
from app.status.base import BaseStatusStore
from app.status.models import ErrorKind, ProcessingStatus, TransitionPayload

ERROR_DETAIL_LIMIT = 2000

_STARTABLE = frozenset({ProcessingStatus.PENDING, ProcessingStatus.QUEUED})
_RETAINABLE_ON_ABANDON = frozenset(
    {ProcessingStatus.PENDING, ProcessingStatus.QUEUED, ProcessingStatus.PROCESSING}
)


def truncate_detail(detail: str | None, limit: int = ERROR_DETAIL_LIMIT) -> str | None:
    if detail is None or len(detail) <= limit:
        return detail
    return detail[:limit] + "..."


@dataclass(slots=True)
class PipelineContext:
    """Accumulates data as one run moves through the stages."""

    document: Document
    status: ProcessingStatus
    raw_bytes: bytes = b""
    extraction: ExtractionOutcome | None = None
    prompt: Prompt | None = None
    analysis_result: AnalysisResult | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def document_id(self) -> str:
        return self.document.id


class PipelineOrchestrator:
    def __init__(
        self,
        *,
        status_store: BaseStatusStore,
        documents: BaseDocumentsRepository,
        storage: BaseContentStorage,
        text_extractor: TextExtractor,
        prompt_builder: AnalysisPromptBuilder,
        analysis_client: AnalysisClient,
        extraction_options: ExtractionOptions | None = None,
        storage_timeout_seconds: float = 10.0,
    ) -> None:
        self._store = status_store
        self._documents = documents
        self._storage = storage
        self._text_extractor = text_extractor
        self._prompt_builder = prompt_builder
        self._analysis_client = analysis_client
        self._extraction_options = extraction_options or ExtractionOptions()
        self._storage_timeout_seconds = storage_timeout_seconds

    def run(self, document_id: str) -> ProcessingStatus | None:
        """Process one document.

        Returns:
            The terminal status written, or None when the run was discarded
            (record missing or not startable, lost a race, document deleted).
        """
        record = self._store.get(document_id)
        if record is None:
            Log.warning("No processing record, skipping run", document_id=document_id)
            return None
        if record.status not in _STARTABLE:
            Log.info(
                "Record is not waiting to start, skipping run",
                document_id=document_id,
                status=record.status.value,
            )
            return None

        document = self._documents.find_by_id(document_id)
        if document is None:
            Log.warning("Document deleted before processing started", document_id=document_id)
            return None

        context = PipelineContext(document=document, status=record.status)
        Log.info("Starting document processing", document_id=document_id)

        try:
            context.raw_bytes = self._load_content(document)
        except ContentUnavailableError as exc:
            return self._finish(
                context,
                ProcessingStatus.FAILED,
                TransitionPayload(
                    error_message="Content unavailable",
                    error_kind=ErrorKind.CONTENT_UNAVAILABLE,
                    error_detail=truncate_detail(str(exc)),
                ),
            )

        if not self._advance(context, ProcessingStatus.PROCESSING):
            return None

        return self._process(context)

    def abandon(self, document_id: str, reason: str) -> bool:
        """Fail a run that was interrupted by an unexpected error.

        Keeps the record from being stuck in a non-terminal status, which
        would block any new analysis request.
        """
        record = self._store.get(document_id)
        if record is None or record.status not in _RETAINABLE_ON_ABANDON:
            return False
        return self._store.transition(
            document_id,
            record.status,
            ProcessingStatus.FAILED,
            TransitionPayload(
                error_message="Processing aborted by an unexpected error",
                error_detail=truncate_detail(reason),
            ),
        )

    def _process(self, context: PipelineContext) -> ProcessingStatus | None:
        document = context.document

        outcome = self._text_extractor.extract(
            context.raw_bytes,
            normalize_mime_type(document.mime_type),
            document.file_name or document.display_name,
            self._extraction_options,
        )
        context.extraction = outcome
        if outcome.failed:
            return self._finish(
                context,
                ProcessingStatus.FAILED,
                TransitionPayload(
                    error_message=outcome.failure_reason,
                    error_kind=ErrorKind.EXTRACTION_FAILURE,
                    error_detail=truncate_detail(outcome.failure_reason),
                ),
            )
        context.warnings.extend(outcome.warnings)
        if self._is_deleted(context):
            return None

        try:
            context.prompt = self._prompt_builder.build(
                document.document_type, document.display_name, outcome.text
            )
        except InvalidDocumentTypeError as exc:
            return self._finish(
                context,
                ProcessingStatus.FAILED,
                TransitionPayload(
                    error_message="Invalid document type",
                    error_kind=ErrorKind.INVALID_DOCUMENT_TYPE,
                    error_detail=truncate_detail(str(exc)),
                ),
            )
        if context.prompt.truncated:
            Log.info(
                "Extracted text truncated for analysis",
                document_id=context.document_id,
                original_length=context.prompt.original_length,
            )

        try:
            result = self._analysis_client.analyze(context.prompt)
        except AnalysisError as exc:
            return self._finish(context, ProcessingStatus.FAILED, self._analysis_failure(exc))
        context.analysis_result = result

        return self._persist(context, result)

    def _persist(
        self, context: PipelineContext, result: AnalysisResult
    ) -> ProcessingStatus | None:
        result_payload = result.to_payload()
        if context.warnings:
            return self._finish(
                context,
                ProcessingStatus.WARNING,
                TransitionPayload(
                    analysis_result=result_payload,
                    error_message="; ".join(context.warnings),
                    error_kind=ErrorKind.EXTRACTION_WARNING,
                ),
            )
        return self._finish(
            context,
            ProcessingStatus.COMPLETED,
            TransitionPayload(analysis_result=result_payload),
        )

    @staticmethod
    def _analysis_failure(exc: AnalysisError) -> TransitionPayload:
        if isinstance(exc, ExternalServiceError):
            message = "Analysis service unavailable"
        elif exc.kind == ErrorKind.MALFORMED_RESPONSE:
            message = "Analysis service returned a malformed response"
        else:
            message = "Analysis service response failed validation"
        detail = str(exc)
        if exc.raw_payload:
            detail = f"{detail}\nRaw payload: {exc.raw_payload}"
        return TransitionPayload(
            error_message=message,
            error_kind=exc.kind,
            error_detail=truncate_detail(detail),
        )

    def _load_content(self, document: Document) -> bytes:
        # One executor per load: a hung load keeps only its own thread busy.
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="storage-load")
        try:
            future = executor.submit(self._storage.load_bytes, document.storage_key)
            content = future.result(timeout=self._storage_timeout_seconds)
        except FutureTimeoutError as exc:
            raise ContentUnavailableError(
                f"Loading {document.storage_key} timed out after "
                f"{self._storage_timeout_seconds}s"
            ) from exc
        finally:
            executor.shutdown(wait=False)
        Log.info(
            "Loaded document content",
            document_id=document.id,
            size=len(content),
            storage_key=document.storage_key,
        )
        return content

    def _advance(self, context: PipelineContext, next_status: ProcessingStatus) -> bool:
        if self._is_deleted(context):
            return False
        if not self._store.transition(context.document_id, context.status, next_status):
            Log.warning(
                "Stale transition discarded",
                document_id=context.document_id,
                expected=context.status.value,
                next=next_status.value,
            )
            return False
        Log.info(
            "Status changed",
            document_id=context.document_id,
            previous=context.status.value,
            status=next_status.value,
        )
        context.status = next_status
        return True

    def _finish(
        self,
        context: PipelineContext,
        terminal_status: ProcessingStatus,
        payload: TransitionPayload,
    ) -> ProcessingStatus | None:
        if self._is_deleted(context):
            return None
        if not self._store.transition(
            context.document_id, context.status, terminal_status, payload
        ):
            Log.warning(
                "Stale result discarded",
                document_id=context.document_id,
                expected=context.status.value,
                result=terminal_status.value,
            )
            return None
        log = Log.error if terminal_status == ProcessingStatus.FAILED else Log.info
        log(
            "Document processing finished",
            document_id=context.document_id,
            status=terminal_status.value,
            error_kind=payload.error_kind.value if payload.error_kind else None,
            error_message=payload.error_message,
        )
        context.status = terminal_status
        return terminal_status

    def _is_deleted(self, context: PipelineContext) -> bool:
        if self._documents.is_deleted(context.document_id):
            Log.warning("Document deleted during processing, aborting", document_id=context.document_id)
            return True
        return False


def build_orchestrator(
    settings: Settings,
    *,
    status_store: BaseStatusStore | None = None,
    documents: BaseDocumentsRepository | None = None,
    storage: BaseContentStorage | None = None,
) -> PipelineOrchestrator:
    """Build an orchestrator with all required adapters.

    Collaborators default to the PostgreSQL-backed store and repository and
    to local file storage under ``settings.files_root``.
    """
    return PipelineOrchestrator(
        status_store=status_store or PostgresStatusStore(),
        documents=documents or DocumentsRepository(),
        storage=storage or LocalContentStorage(files_root=Path(settings.files_root)),
        text_extractor=TextExtractorFactory.create(settings),
        prompt_builder=AnalysisClientFactory.create_prompt_builder(settings),
        analysis_client=AnalysisClientFactory.create(settings),
        extraction_options=TextExtractorFactory.options(settings),
        storage_timeout_seconds=settings.storage_timeout_seconds,
    )
