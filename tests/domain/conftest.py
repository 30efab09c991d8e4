"""Pytest configuration for domain package tests."""

import pytest

from cv_editor.domain.record import DocumentRecord


@pytest.fixture
def minimal_record():
    """Smallest valid record: a name and nothing else."""
    return DocumentRecord.model_validate({"contactInfo": {"name": "Ada"}})
