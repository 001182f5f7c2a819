from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Dict, Protocol


@dataclass(frozen=True)
class ScoreRecord:
    score: int
    date: float  # epoch milliseconds
    mode: str


class ScoreRecorder(Protocol):
    """Where a session reports its running score; storage is up to the caller."""

    def create(self, record: ScoreRecord) -> int:
        ...

    def update(self, record_id: int, record: ScoreRecord) -> None:
        ...


class InMemoryScoreRecorder:
    def __init__(self) -> None:
        self.records: Dict[int, ScoreRecord] = {}
        self._ids = itertools.count(1)

    def create(self, record: ScoreRecord) -> int:
        record_id = next(self._ids)
        self.records[record_id] = record
        return record_id

    def update(self, record_id: int, record: ScoreRecord) -> None:
        if record_id not in self.records:
            raise KeyError(f"Score record {record_id} does not exist")
        self.records[record_id] = record

    def best(self, mode: str | None = None) -> ScoreRecord | None:
        candidates = [r for r in self.records.values() if mode is None or r.mode == mode]
        return max(candidates, key=lambda r: r.score, default=None)
