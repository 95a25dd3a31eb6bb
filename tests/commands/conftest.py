"""Fixtures for command tests."""

import os

import pytest

from pocketscholar.config import get_stores
from pocketscholar.models import Chunk


@pytest.fixture(autouse=True)
def isolated_cwd(temp_dir, monkeypatch):
    """Run each command test away from any pocketscholar.yaml in the checkout."""
    workdir = os.path.join(temp_dir, "cwd")
    os.makedirs(workdir)
    monkeypatch.chdir(workdir)


@pytest.fixture
def data_dir(temp_dir):
    """A data directory holding two documents: notes (2 pages, 3 chunks) and paper (1 chunk)."""
    path = os.path.join(temp_dir, "data")
    os.makedirs(path)
    store = get_stores(path)
    store.insert_all(
        [
            Chunk(document_id="notes", page_number=1, chunk_index=0, text="First page."),
            Chunk(document_id="notes", page_number=1, chunk_index=1, text="Still first."),
            Chunk(document_id="notes", page_number=2, chunk_index=2, text="Second page."),
            Chunk(document_id="paper", page_number=1, chunk_index=0, text="Abstract."),
        ]
    )
    return path
