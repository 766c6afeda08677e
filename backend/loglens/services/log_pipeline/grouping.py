#grouping.py - Takes the parsed entries and puts identical messages into the same pile, then ranks the piles.

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .entry import LogEntry, LogLevel

DEFAULT_TOP_N = 15


class GroupKeyPolicy(str, Enum):
    """What part of a message decides which group it lands in."""
    FULL_MESSAGE = "full_message"   # header remainder plus every stack trace line
    FIRST_LINE = "first_line"       # header remainder only


def group_key(message: str, policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE) -> str:
    if policy is GroupKeyPolicy.FIRST_LINE:
        return message.split("\n", 1)[0]
    return message


# Bucket of entries sharing one key
@dataclass
class MessageGroup:
    key: str
    occurrences: List[LogEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.occurrences)

    @property
    def title(self) -> str:
        return self.key.split("\n", 1)[0]

    @property
    def level(self) -> Optional[LogLevel]:
        return self.occurrences[0].level if self.occurrences else None

    @property
    def first_seen(self) -> Optional[datetime]:
        """Timestamp of the first occurrence in input order (not the earliest)."""
        return self.occurrences[0].timestamp if self.occurrences else None

    def occurrences_newest_first(self) -> List[LogEntry]:
        # sorted() is stable, so equal timestamps keep input order
        return sorted(self.occurrences, key=lambda e: e.timestamp, reverse=True)


@dataclass
class GroupRanking:
    groups: List[MessageGroup]
    key_policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE

    @property
    def total_occurrences(self) -> int:
        return sum(g.count for g in self.groups)

    def find(self, key: str) -> Optional[MessageGroup]:
        for g in self.groups:
            if g.key == key:
                return g
        return None

    def __len__(self) -> int:
        return len(self.groups)


def collect_groups(
    entries: Iterable[LogEntry],
    key_policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE,
) -> List[MessageGroup]:
    """Every group, in the order its key was first seen."""
    buckets: Dict[str, MessageGroup] = {}
    for e in entries:
        key = group_key(e.message, key_policy)
        group = buckets.get(key)
        if group is None:
            group = buckets[key] = MessageGroup(key=key)
        group.occurrences.append(e)
    return list(buckets.values())


def group_entries(
    entries: Iterable[LogEntry],
    top_n: int = DEFAULT_TOP_N,
    key_policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE,
) -> GroupRanking:
    """
    Rank groups by frequency.
    Ties keep first-seen order (stable sort), then the list is cut to top_n.
    """
    if top_n < 1:
        raise ValueError(f"top_n must be at least 1, got {top_n}")

    groups = collect_groups(entries, key_policy)
    groups.sort(key=lambda g: g.count, reverse=True)
    return GroupRanking(groups=groups[:top_n], key_policy=key_policy)


def toggle_selection(current: Optional[str], key: str) -> Optional[str]:
    """Selecting the already selected group clears the selection."""
    return None if current == key else key


def filter_by_group(
    entries: Iterable[LogEntry],
    key: Optional[str],
    key_policy: GroupKeyPolicy = GroupKeyPolicy.FULL_MESSAGE,
) -> List[LogEntry]:
    if key is None:
        return list(entries)
    return [e for e in entries if group_key(e.message, key_policy) == key]
