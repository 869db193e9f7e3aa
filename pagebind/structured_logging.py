"""JSONL event log of dispatched actions, one directory per run."""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


def new_run_id() -> str:
    return time.strftime("%Y%m%d-%H%M%S") + "-" + uuid.uuid4().hex[:6]


@dataclass(slots=True)
class RunDirectory:
    root: Path
    shots: Path
    events: Path

    @classmethod
    def create(cls, base_dir: Path, run_id: str) -> "RunDirectory":
        root = Path(base_dir) / run_id
        shots = root / "shots"
        shots.mkdir(parents=True, exist_ok=True)
        return cls(root=root, shots=shots, events=root / "events.jsonl")


@dataclass(slots=True)
class ActionEvent:
    action: str
    page: Optional[str]
    success: bool
    context: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None
    screenshot_path: Optional[str] = None


class ActionEventLog:
    """Appends one JSON line per action outcome under ``<base_dir>/<run_id>``."""

    def __init__(self, base_dir: Path, run_id: Optional[str] = None) -> None:
        self.run_id = run_id or new_run_id()
        self.directory = RunDirectory.create(base_dir, self.run_id)
        self._step = 0
        self._stream = self.directory.events.open("a", encoding="utf-8")

    @property
    def next_step(self) -> int:
        return self._step + 1

    def screenshot_path(self) -> Path:
        return self.directory.shots / f"step_{self.next_step:04d}.png"

    def record(self, event: ActionEvent) -> int:
        self._step += 1
        payload = {"ts": time.time(), "run_id": self.run_id, "step": self._step, **asdict(event)}
        self._stream.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        self._stream.flush()
        return self._step

    def close(self) -> None:
        if not self._stream.closed:
            self._stream.close()
