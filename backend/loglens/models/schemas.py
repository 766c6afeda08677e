from pydantic import BaseModel, Field
from typing import List, Optional, Literal
from datetime import datetime, timezone


LevelToken = Literal["ERR", "WRN"]


# ============================================================================
# File Selection Models
# ============================================================================

class FileSummaryModel(BaseModel):
    """Quick [ERR]/[WRN] tally for one selected file."""
    file_name: str
    error_count: int = 0
    warning_count: int = 0


class SelectedFileModel(BaseModel):
    """A file waiting in the selection."""
    index: int
    file_name: str
    size_bytes: int
    summary: FileSummaryModel


class FileSelectionResponse(BaseModel):
    """Response from GET/POST/DELETE /api/files."""
    files: List[SelectedFileModel]


class FileReadFailureModel(BaseModel):
    """A file whose contents could not be read; it contributed no entries."""
    file_name: str
    reason: str


class ProcessResponse(BaseModel):
    """Response from POST /api/process."""
    num_files: int
    num_entries: int
    error_count: int
    warning_count: int
    failures: List[FileReadFailureModel] = Field(default_factory=list)


# ============================================================================
# Entry Models
# ============================================================================

class LogEntryModel(BaseModel):
    """One parsed entry."""
    timestamp: datetime
    level: LevelToken
    message: str
    source_file: str


# ============================================================================
# Aggregation Models
# ============================================================================

class GroupSummary(BaseModel):
    """A ranked message group."""
    rank: int
    key: str
    title: str
    count: int
    level: LevelToken
    first_seen: datetime
    # None for the selected group itself, or when nothing is selected
    overlaps_selected: Optional[bool] = None


class IntervalModel(BaseModel):
    """One 15 minute timeline bucket."""
    start: datetime
    error_count: int
    warning_count: int
    count: int
    occurrences: List[LogEntryModel] = Field(default_factory=list)


class TimelineModel(BaseModel):
    """Bucketed timeline over the padded range of the level-filtered entries."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    interval_minutes: int = 15
    intervals: List[IntervalModel] = Field(default_factory=list)


class ScatterPointModel(BaseModel):
    """An individual occurrence of the selected group."""
    timestamp: datetime
    level: LevelToken
    source_file: str
    interval_count: int


class AnalysisView(BaseModel):
    """Everything the viewer renders for the current state."""
    level: LevelToken
    selected_group: Optional[str] = None
    total_entries: int
    total_occurrences: int
    groups: List[GroupSummary] = Field(default_factory=list)
    timeline: TimelineModel
    scatter: List[ScatterPointModel] = Field(default_factory=list)
    file_summaries: List[FileSummaryModel] = Field(default_factory=list)


class OccurrenceDetail(BaseModel):
    """One occurrence of a group, newest first, for detail navigation."""
    rank: int
    key: str
    index: int
    total: int
    has_previous: bool
    has_next: bool
    entry: LogEntryModel


# ============================================================================
# Request Models
# ============================================================================

class LevelRequest(BaseModel):
    level: LevelToken


class SelectionRequest(BaseModel):
    group_key: Optional[str] = None


# ============================================================================
# API Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
