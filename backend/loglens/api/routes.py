from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from typing import List
from loglens.models.schemas import (
    AnalysisView, ErrorResponse, FileSelectionResponse, FileSummaryModel,
    HealthResponse, LevelRequest, OccurrenceDetail, ProcessResponse,
    SelectedFileModel, SelectionRequest
)
from loglens.core.errors import UnsupportedFileError
from loglens.services.log_pipeline import LogLevel
from loglens.services.orchestrator import (
    build_view, ensure_accepted, occurrence_detail, process_selection,
    ranked_group_keys, selected_file_from_bytes, unreadable_file
)
from loglens.services.session import SessionHolder, SessionSnapshot
from loglens.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def get_session(request: Request) -> SessionHolder:
    return request.app.state.session


def _selection_response(snapshot: SessionSnapshot) -> FileSelectionResponse:
    return FileSelectionResponse(
        files=[
            SelectedFileModel(
                index=i,
                file_name=f.name,
                size_bytes=f.size_bytes,
                summary=FileSummaryModel(**f.summary.to_dict())
            )
            for i, f in enumerate(snapshot.files)
        ]
    )


@router.get("/files", response_model=FileSelectionResponse)
async def list_files(session: SessionHolder = Depends(get_session)):
    """List the selected files with their quick error/warning tallies."""
    return _selection_response(session.current)


@router.post(
    "/files",
    response_model=FileSelectionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file"}
    }
)
async def select_files(
    files: List[UploadFile] = File(...),
    session: SessionHolder = Depends(get_session)
):
    """
    Add files to the selection.

    Each file is summarized immediately; the full parse waits for /process.
    A file whose contents cannot be read stays selected with zero counts.
    """
    for file in files:
        if not file.filename:
            raise HTTPException(status_code=400, detail="No filename provided")
        try:
            ensure_accepted(file.filename)
        except UnsupportedFileError as e:
            raise HTTPException(status_code=400, detail=str(e))

    selected = []
    for file in files:
        try:
            file_bytes = await file.read()
        except OSError as e:
            selected.append(unreadable_file(file.filename, str(e)))
            continue
        logger.info(f"Received file: {file.filename}, size: {len(file_bytes)} bytes")
        selected.append(selected_file_from_bytes(file.filename, file_bytes))

    snapshot = session.replace(session.current.with_files_added(*selected))
    return _selection_response(snapshot)


@router.delete(
    "/files/{index}",
    response_model=FileSelectionResponse,
    responses={
        404: {"model": ErrorResponse, "description": "File not found"}
    }
)
async def remove_file(index: int, session: SessionHolder = Depends(get_session)):
    """Remove a file from the selection."""
    try:
        snapshot = session.current.with_file_removed(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    session.replace(snapshot)
    return _selection_response(snapshot)


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={
        500: {"model": ErrorResponse, "description": "Processing error"}
    }
)
async def process(session: SessionHolder = Depends(get_session)):
    """
    Parse every selected file into entries.

    Replaces the previous batch wholesale and clears the group selection.
    """
    try:
        snapshot, result = process_selection(session.current)
        session.replace(snapshot)
        return result.to_response(num_files=len(snapshot.files))
    except Exception as e:
        logger.error(f"Processing failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500, detail=f"Processing failed: {str(e)}")


@router.get("/view", response_model=AnalysisView)
async def get_view(session: SessionHolder = Depends(get_session)):
    """Ranked groups, timeline and overlap flags for the current state."""
    return build_view(session.current)


@router.put("/view/level", response_model=AnalysisView)
async def set_level(body: LevelRequest, session: SessionHolder = Depends(get_session)):
    """Switch between errors and warnings. Clears the group selection."""
    snapshot = session.replace(session.current.with_level(LogLevel(body.level)))
    return build_view(snapshot)


@router.put(
    "/view/selection",
    response_model=AnalysisView,
    responses={
        404: {"model": ErrorResponse, "description": "Group not found"}
    }
)
async def set_selection(body: SelectionRequest, session: SessionHolder = Depends(get_session)):
    """
    Toggle the selected group.

    Selecting the current group again, or sending null, shows all groups.
    """
    current = session.current
    if body.group_key is not None and body.group_key not in ranked_group_keys(current):
        raise HTTPException(status_code=404, detail="Group not found")

    snapshot = session.replace(current.with_selection_toggled(body.group_key))
    return build_view(snapshot)


@router.get(
    "/groups/{rank}/occurrences",
    response_model=OccurrenceDetail,
    responses={
        404: {"model": ErrorResponse, "description": "Occurrence not found"}
    }
)
async def get_occurrence(rank: int, index: int = 0, session: SessionHolder = Depends(get_session)):
    """Step through a group's occurrences, most recent first."""
    try:
        return occurrence_detail(session.current, rank, index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/reset", response_model=AnalysisView)
async def reset(session: SessionHolder = Depends(get_session)):
    """Drop the selection and the current batch."""
    return build_view(session.reset())


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse()
