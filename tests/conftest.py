"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest

from cv_editor.domain.sample import sample_record
from cv_editor.observability import EditorObserver
from cv_editor.store import DocumentStore


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "CV_EDITOR_SEED",
        "CV_EDITOR_VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def record():
    return sample_record()


@pytest.fixture
def observer():
    return EditorObserver(session_id="test")


@pytest.fixture
def store(record, observer):
    return DocumentStore(record, observer=observer)
