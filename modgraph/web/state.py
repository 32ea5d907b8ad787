"""In-memory state for the HTTP API, no database required."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from modgraph.pipeline import AnalysisReport


@dataclass
class AnalysisSession:
    report: AnalysisReport
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


class AppState:
    """Analyses shared by all API routes."""

    def __init__(self):
        self._analyses: dict[str, AnalysisSession] = {}
        self._lock = threading.Lock()

    def add(self, session: AnalysisSession) -> None:
        with self._lock:
            self._analyses[session.id] = session

    def get(self, analysis_id: str) -> AnalysisSession | None:
        return self._analyses.get(analysis_id)

    def delete(self, analysis_id: str) -> bool:
        with self._lock:
            return self._analyses.pop(analysis_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._analyses.clear()


# Module-level singleton, imported by the routers
state = AppState()
