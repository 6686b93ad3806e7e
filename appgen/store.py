"""JSON-file project store.

Keeps one ``<project-id>.json`` file per project holding the current
generated app, its iteration history and the chat-style message log. There
is no locking: concurrent writers to the same project resolve as last write
wins.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from appgen.parser.models import GeneratedApp
from appgen.utils import load_json, save_json


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class StoreError(Exception):
    """Base class for project store failures."""


class ProjectNotFoundError(StoreError):
    """Raised when a project id has no stored record."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Iteration(BaseModel):
    """One generation or modification step."""

    version: int = Field(..., ge=1)
    request: str
    summary: str = ""
    created_at: str = Field(default_factory=_now)


class Message(BaseModel):
    """A chat-style log line shown next to the app."""

    role: Literal["user", "assistant"]
    content: str
    created_at: str = Field(default_factory=_now)


class ProjectRecord(BaseModel):
    """Everything stored for one project."""

    id: str
    name: str
    created_at: str = Field(default_factory=_now)
    updated_at: str = Field(default_factory=_now)
    app: GeneratedApp
    iterations: list[Iteration] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)

    @property
    def version(self) -> int:
        return self.iterations[-1].version if self.iterations else 0


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


def _describe_new_app(app: GeneratedApp) -> str:
    return f"Generated {app.template_name or app.template_category.value} \"{app.app_name}\"."


class ProjectStore:
    """Stores ``ProjectRecord``s as JSON files beneath *root*."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, project_id: str) -> Path:
        return self.root / f"{project_id}.json"

    def _write(self, record: ProjectRecord) -> ProjectRecord:
        save_json(record.model_dump(mode="json"), self._path(record.id))
        return record

    def create(self, request: str, app: GeneratedApp) -> ProjectRecord:
        """Store a freshly generated app as a new project (version 1)."""
        summary = app.summary or _describe_new_app(app)
        record = ProjectRecord(
            id=uuid.uuid4().hex,
            name=app.customizations.business_name,
            app=app,
            iterations=[Iteration(version=1, request=request, summary=summary)],
            messages=[
                Message(role="user", content=request),
                Message(role="assistant", content=summary),
            ],
        )
        return self._write(record)

    def get(self, project_id: str) -> ProjectRecord:
        """Load a project.

        Raises:
            ProjectNotFoundError: If no record exists for *project_id*.
        """
        path = self._path(project_id)
        if not path.is_file():
            raise ProjectNotFoundError(project_id)
        return ProjectRecord.model_validate(load_json(path))

    def record_iteration(self, project_id: str, request: str, app: GeneratedApp) -> ProjectRecord:
        """Replace the current app and log the request and its summary."""
        record = self.get(project_id)
        summary = app.summary or _describe_new_app(app)
        record.app = app
        record.name = app.customizations.business_name
        record.iterations.append(
            Iteration(version=record.version + 1, request=request, summary=summary)
        )
        record.messages.append(Message(role="user", content=request))
        record.messages.append(Message(role="assistant", content=summary))
        record.updated_at = _now()
        return self._write(record)

    def list_projects(self) -> list[ProjectRecord]:
        """Return every stored project, most recently updated first."""
        if not self.root.is_dir():
            return []
        records = [
            ProjectRecord.model_validate(load_json(path))
            for path in sorted(self.root.glob("*.json"))
            if path.name != "config.json"
        ]
        return sorted(records, key=lambda r: r.updated_at, reverse=True)


def export_files(app: GeneratedApp, directory: str | Path) -> list[Path]:
    """Write every file of *app* beneath *directory*; returns written paths.

    Raises:
        StoreError: If a file path would land outside *directory*.
    """
    base = Path(directory).resolve()
    written: list[Path] = []
    for rel_path, content in sorted(app.files.items()):
        target = (base / rel_path).resolve()
        if not target.is_relative_to(base):
            raise StoreError(f"Refusing to write outside {base}: {rel_path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        written.append(target)
    return written
