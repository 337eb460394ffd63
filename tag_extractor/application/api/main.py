from fastapi import FastAPI, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
from typing import List, Optional

from loguru import logger

from tag_extractor.application.settings import get_settings, Settings
from tag_extractor.application.log_setup import setup_logging
from tag_extractor.application.errors import (
    PathOutsideDataDirError,
    ReadFailure,
    UsageError,
    WriteFailure,
)
from tag_extractor.application.services.session import ExtractionResult, ExtractionSession
from tag_extractor.application.services.stopwords import StopWordSet
from tag_extractor.application.services.tag_extractor import TagExtractorService

# Configure logging once
setup_logging()

app = FastAPI(title="Tag / Keyword Extractor")

# --- Dependencies ---
def settings_dep() -> Settings:
    return get_settings()

def extractor_dep(settings: Settings = Depends(settings_dep)) -> TagExtractorService:
    return TagExtractorService.from_settings(settings)

# One session for the app lifetime, like the single window of a desktop tool.
# Handlers run in FastAPI's thread pool; the session serializes them with its own lock.
_session: ExtractionSession | None = None
def session_dep(settings: Settings = Depends(settings_dep)) -> ExtractionSession:
    global _session
    if _session is None:
        _session = ExtractionSession.build(settings)
    return _session


# --- Schemas ---
class PathRequest(BaseModel):
    path: str

class TagEntry(BaseModel):
    word: str
    count: int

class ExtractionResponse(BaseModel):
    document_name: Optional[str]
    tags: List[TagEntry]
    report: List[str]
    total_distinct: int
    can_save: bool

class TagsRequest(BaseModel):
    text: str
    # required: an empty list is an explicit "filter nothing"
    stop_words: List[str]
    document_name: Optional[str] = None


def _to_response(result: ExtractionResult) -> ExtractionResponse:
    return ExtractionResponse(
        document_name=result.document_name,
        tags=[TagEntry(word=e.word, count=e.count) for e in result.entries],
        report=result.report_lines,
        total_distinct=result.total_distinct,
        can_save=result.can_save,
    )


def _raise_http(e: Exception) -> None:
    if isinstance(e, UsageError):
        logger.warning("Rejected out-of-order request: {}", e)
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, PathOutsideDataDirError):
        raise HTTPException(status_code=403, detail=str(e))
    if isinstance(e, ReadFailure):
        raise HTTPException(status_code=422, detail=str(e))
    if isinstance(e, WriteFailure):
        raise HTTPException(status_code=500, detail=str(e))
    raise e


# --- Meta ---
@app.get("/", tags=["meta"])
def root(settings: Settings = Depends(settings_dep)):
    return {
        "ok": True,
        "app_name": settings.app_name,
        "environment": settings.app_env,
        "debug": settings.debug,
    }


# --- Session endpoints (choose files → extract → save) ---
@app.post("/session/document", tags=["session"])
def choose_document(body: PathRequest, session: ExtractionSession = Depends(session_dep)):
    try:
        session.choose_document(body.path)
    except PathOutsideDataDirError as e:
        _raise_http(e)
    return {"document": session.document_name}

@app.post("/session/stop-words", tags=["session"])
def choose_stop_words(body: PathRequest, session: ExtractionSession = Depends(session_dep)):
    try:
        count = session.choose_stop_words(body.path)
    except (PathOutsideDataDirError, ReadFailure) as e:
        _raise_http(e)
    return {"stop_words_file": session.stop_words_path.name, "loaded": count}

@app.post("/session/extract", tags=["session"], response_model=ExtractionResponse)
def extract_session(session: ExtractionSession = Depends(session_dep)):
    try:
        result = session.extract()
    except (UsageError, ReadFailure) as e:
        _raise_http(e)
    return _to_response(result)

@app.post("/session/save", tags=["session"])
def save_session(body: PathRequest, session: ExtractionSession = Depends(session_dep)):
    try:
        out = session.save(body.path)
    except (UsageError, PathOutsideDataDirError, WriteFailure) as e:
        _raise_http(e)
    return {"saved_to": str(out)}

@app.post("/session/clear", tags=["session"])
def clear_session(session: ExtractionSession = Depends(session_dep)):
    session.clear()
    return {"ok": True}


# --- Stateless extraction on posted text ---
@app.post("/tags", tags=["tags"], response_model=ExtractionResponse)
def tags(body: TagsRequest, extractor: TagExtractorService = Depends(extractor_dep)):
    stop_words = StopWordSet.load(body.stop_words)
    entries = extractor.rank(extractor.extract(body.text.splitlines(), stop_words))
    result = ExtractionResult(
        document_name=body.document_name,
        entries=entries,
        report_lines=extractor.format(entries) if entries else [],
    )
    return _to_response(result)

@app.post("/tags/report", tags=["tags"], response_class=PlainTextResponse)
def tags_report(body: TagsRequest, extractor: TagExtractorService = Depends(extractor_dep)):
    stop_words = StopWordSet.load(body.stop_words)
    entries = extractor.rank(extractor.extract(body.text.splitlines(), stop_words))
    return extractor.serialize(entries, body.document_name)
