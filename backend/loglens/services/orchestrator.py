import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from loglens.core.config import settings
from loglens.core.errors import FileReadError, UnsupportedFileError
from loglens.core.logging import get_logger
from loglens.models.schemas import (
    AnalysisView, FileReadFailureModel, FileSummaryModel, GroupSummary,
    IntervalModel, LogEntryModel, OccurrenceDetail, ProcessResponse,
    ScatterPointModel, TimelineModel
)
from loglens.services.log_pipeline import (
    EntryRepository, FileSummary, GroupKeyPolicy, LogEntry, LogLevel,
    build_scatter, build_timeline, filter_by_group, group_entries,
    overlaps, parse_entries, summarize_file, timeline_range
)
from loglens.services.log_pipeline.timeline import INTERVAL
from loglens.services.session import SelectedFile, SessionSnapshot

logger = get_logger(__name__)


@dataclass
class ProcessResult:
    """Outcome of one "process" action over the selected files."""
    repository: EntryRepository
    failures: List[FileReadFailureModel] = field(default_factory=list)
    elapsed_ms: float = 0.0

    def to_response(self, num_files: int) -> ProcessResponse:
        return ProcessResponse(
            num_files=num_files,
            num_entries=len(self.repository),
            error_count=self.repository.count_level(LogLevel.ERROR),
            warning_count=self.repository.count_level(LogLevel.WARNING),
            failures=self.failures,
        )


# ============================================================================
# File selection
# ============================================================================

def is_accepted(file_name: str, allowed: Optional[List[str]] = None) -> bool:
    """Acceptance looks at the extension only; contents are checked line by line later."""
    allowed = allowed if allowed is not None else settings.allowed_extensions_list
    return Path(file_name).suffix.lower() in allowed


def ensure_accepted(file_name: str, allowed: Optional[List[str]] = None) -> None:
    allowed = allowed if allowed is not None else settings.allowed_extensions_list
    if not is_accepted(file_name, allowed):
        raise UnsupportedFileError(file_name, allowed)


def decode_file(file_bytes: bytes) -> str:
    """Decode file bytes to string with fallback encodings."""
    encodings = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']

    for encoding in encodings:
        try:
            return file_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue

    # Last resort: decode with replacement
    return file_bytes.decode('utf-8', errors='replace')


def read_path(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileReadError(os.path.basename(path), e.strerror or str(e)) from e


def selected_file_from_bytes(file_name: str, file_bytes: bytes) -> SelectedFile:
    """Decode a picked file and run the quick summary on it right away."""
    text = decode_file(file_bytes)
    summary = summarize_file(file_name, text)
    logger.debug(
        f"Selected {file_name}: {summary.error_count} [ERR], {summary.warning_count} [WRN]")
    return SelectedFile(
        name=file_name,
        text=text,
        size_bytes=len(file_bytes),
        summary=summary,
    )


def unreadable_file(file_name: str, reason: str) -> SelectedFile:
    """A picked file whose bytes could not be obtained. It stays selected with zero counts."""
    logger.warning(f"Could not read {file_name}: {reason}")
    return SelectedFile(
        name=file_name,
        text=None,
        size_bytes=0,
        summary=FileSummary(file_name=file_name),
        read_error=reason,
    )


def selected_file_from_path(path: str) -> SelectedFile:
    name = os.path.basename(path)
    try:
        return selected_file_from_bytes(name, read_path(path))
    except FileReadError as e:
        return unreadable_file(e.file_name, e.reason)


# ============================================================================
# Processing
# ============================================================================

def process_files(files: Tuple[SelectedFile, ...]) -> ProcessResult:
    """
    Parse every selected file in selection order.
    An unreadable or unparseable file is reported and contributes no entries;
    the rest of the batch goes on.
    """
    t0 = time.time()
    entries: List[LogEntry] = []
    failures: List[FileReadFailureModel] = []

    logger.info(f"Processing batch of {len(files)} file(s)")

    for f in files:
        if f.text is None:
            logger.warning(f"Skipping {f.name}: {f.read_error}")
            failures.append(FileReadFailureModel(
                file_name=f.name, reason=f.read_error or "unreadable"))
            continue

        try:
            parsed = parse_entries(f.text, f.name)
        except Exception as e:
            # One bad file never costs the batch the entries of the others
            logger.warning(f"Could not parse {f.name}: {e}", exc_info=True)
            failures.append(FileReadFailureModel(
                file_name=f.name, reason=f"parse failed: {e}"))
            continue

        logger.debug(f"Parsed {len(parsed)} entries from {f.name}")
        entries.extend(parsed)

    result = ProcessResult(
        repository=EntryRepository(entries),
        failures=failures,
        elapsed_ms=(time.time() - t0) * 1000,
    )
    logger.info(
        f"Batch processed - files: {len(files)}, entries: {len(entries)}, "
        f"failures: {len(failures)}, took: {result.elapsed_ms:.1f}ms")
    return result


def process_selection(snapshot: SessionSnapshot) -> Tuple[SessionSnapshot, ProcessResult]:
    result = process_files(snapshot.files)
    return snapshot.with_repository(result.repository), result


# ============================================================================
# Views
# ============================================================================

def entry_to_model(entry: LogEntry) -> LogEntryModel:
    return LogEntryModel(
        timestamp=entry.timestamp,
        level=entry.level.value,
        message=entry.message,
        source_file=entry.source_file,
    )


def _key_policy(key_policy: Optional[GroupKeyPolicy]) -> GroupKeyPolicy:
    return key_policy if key_policy is not None else settings.group_key_policy


def build_view(
    snapshot: SessionSnapshot,
    top_n: Optional[int] = None,
    key_policy: Optional[GroupKeyPolicy] = None,
) -> AnalysisView:
    """
    Recompute every aggregate from the snapshot:
    level filter -> ranked groups -> timeline (range from the level filter,
    counts from the selected group) -> overlap flags against the selection.
    """
    top_n = top_n if top_n is not None else settings.top_n
    policy = _key_policy(key_policy)
    selected = snapshot.selected_group

    filtered = snapshot.repository.filter_level(snapshot.level)
    ranking = group_entries(filtered, top_n=top_n, key_policy=policy)
    counted = filter_by_group(filtered, selected, policy)
    intervals = build_timeline(filtered, counted)
    bounds = timeline_range(filtered)

    groups: List[GroupSummary] = []
    for rank, g in enumerate(ranking.groups, start=1):
        overlap_flag = None
        if selected is not None and g.key != selected:
            overlap_flag = overlaps(g.occurrences, counted)
        groups.append(GroupSummary(
            rank=rank,
            key=g.key,
            title=g.title,
            count=g.count,
            level=g.level.value,
            first_seen=g.first_seen,
            overlaps_selected=overlap_flag,
        ))

    timeline = TimelineModel(
        start=bounds[0] if bounds else None,
        end=bounds[1] if bounds else None,
        interval_minutes=int(INTERVAL.total_seconds() // 60),
        intervals=[
            IntervalModel(
                start=i.start,
                error_count=i.error_count,
                warning_count=i.warning_count,
                count=i.count,
                occurrences=[entry_to_model(e) for e in i.entries],
            )
            for i in intervals
        ],
    )

    scatter: List[ScatterPointModel] = []
    if selected is not None:
        scatter = [
            ScatterPointModel(
                timestamp=p.timestamp,
                level=p.level.value,
                source_file=p.source_file,
                interval_count=p.interval_count,
            )
            for p in build_scatter(intervals)
        ]

    return AnalysisView(
        level=snapshot.level.value,
        selected_group=selected,
        total_entries=len(filtered),
        total_occurrences=ranking.total_occurrences,
        groups=groups,
        timeline=timeline,
        scatter=scatter,
        file_summaries=[FileSummaryModel(**f.summary.to_dict()) for f in snapshot.files],
    )


def ranked_group_keys(
    snapshot: SessionSnapshot,
    top_n: Optional[int] = None,
    key_policy: Optional[GroupKeyPolicy] = None,
) -> List[str]:
    top_n = top_n if top_n is not None else settings.top_n
    filtered = snapshot.repository.filter_level(snapshot.level)
    ranking = group_entries(filtered, top_n=top_n, key_policy=_key_policy(key_policy))
    return [g.key for g in ranking.groups]


def occurrence_detail(
    snapshot: SessionSnapshot,
    rank: int,
    index: int = 0,
    top_n: Optional[int] = None,
    key_policy: Optional[GroupKeyPolicy] = None,
) -> OccurrenceDetail:
    """
    Occurrence `index` of the group at `rank` (1-based), most recent first.
    Raises IndexError when either is out of range.
    """
    top_n = top_n if top_n is not None else settings.top_n
    filtered = snapshot.repository.filter_level(snapshot.level)
    ranking = group_entries(filtered, top_n=top_n, key_policy=_key_policy(key_policy))

    if rank < 1 or rank > len(ranking.groups):
        raise IndexError(f"No group at rank {rank}")

    group = ranking.groups[rank - 1]
    ordered = group.occurrences_newest_first()
    if index < 0 or index >= len(ordered):
        raise IndexError(f"No occurrence {index} in group {rank}")

    return OccurrenceDetail(
        rank=rank,
        key=group.key,
        index=index,
        total=len(ordered),
        has_previous=index > 0,
        has_next=index < len(ordered) - 1,
        entry=entry_to_model(ordered[index]),
    )
