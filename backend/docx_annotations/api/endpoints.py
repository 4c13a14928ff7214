from fastapi import APIRouter, UploadFile, File, HTTPException
from fastapi.concurrency import run_in_threadpool
from docx_annotations.analysis.highlights import color_name
from docx_annotations.analysis.orchestrator import run_comments, run_commented, run_highlights, open_numbering
from docx_annotations.core.config import settings
from docx_annotations.core.errors import (
    ArchiveError,
    ExtractionError,
    MalformedAttributeError,
    MalformedStructureError,
    MalformedXmlError,
    PartNotFoundError,
)
from docx_annotations.models.pydantic_models import (
    CommentsResponse,
    CommentedResponse,
    HealthStatus,
    HighlightRecord,
    HighlightsResponse,
    NumberingResponse,
)

router = APIRouter()

# Converte os erros de extracao em respostas HTTP
def _http_error(exc: ExtractionError) -> HTTPException:
    if isinstance(exc, PartNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, (ArchiveError, MalformedXmlError, MalformedAttributeError)):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, MalformedStructureError):
        return HTTPException(status_code=500, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


# Cada extracao roda no threadpool, uma chamada independente por requisicao
async def _run(func, file: UploadFile):
    file_content = await file.read()
    try:
        return await run_in_threadpool(func, file_content)
    except ExtractionError as e:
        raise _http_error(e) from e


@router.get("/health", response_model=HealthStatus)
async def health():
    return HealthStatus(status="ok", environment=settings.ENVIRONMENT)


@router.post("/comments", response_model=CommentsResponse)
async def extract_comments(file: UploadFile = File(...)):
    extractor = await _run(run_comments, file)
    return CommentsResponse(records=extractor.get_records(), anomalies=extractor.anomalies)


@router.post("/commented", response_model=CommentedResponse)
async def extract_commented(file: UploadFile = File(...)):
    extractor = await _run(run_commented, file)
    return CommentedResponse(records=extractor.get_records(), anomalies=extractor.anomalies)


@router.post("/highlights", response_model=HighlightsResponse)
async def extract_highlights(file: UploadFile = File(...)):
    extractor = await _run(run_highlights, file)
    records = [
        HighlightRecord(color_id=run.color_id, color=color_name(extractor.colors, run), text=run.text)
        for run in extractor.get_records()
    ]
    return HighlightsResponse(colors=extractor.colors, records=records, anomalies=extractor.anomalies)


@router.post("/numbering", response_model=NumberingResponse)
async def extract_numbering(file: UploadFile = File(...)):
    entries = await _run(open_numbering, file)
    return NumberingResponse(records=[entries[num_id] for num_id in sorted(entries)])
