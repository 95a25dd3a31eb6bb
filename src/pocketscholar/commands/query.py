# src/pocketscholar/commands/query.py
"""Ask command - answer a question from the stored documents."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pocketscholar.commands.base import PassageResult, QueryResult, SourceResult
from pocketscholar.config import (
    ConfigError,
    create_scholar,
    get_scholar_config,
    load_config,
    resolve_data_dir,
)
from pocketscholar.models import RagResult

if TYPE_CHECKING:
    from pocketscholar.scholar import PocketScholar


def query(
    question: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    k: int | None = None,
    document_ids: list[str] | None = None,
    min_similarity: float | None = None,
    raw: bool = False,
) -> QueryResult:
    """Answer a question from the stored documents.

    Args:
        question: The question to ask
        data_dir: Override data directory
        config_path: Override config file path
        k: Number of chunks to retrieve (None for the settings default)
        document_ids: Restrict the search to these documents
        min_similarity: Minimum relevance score (None for the settings default)
        raw: If True, return the retrieved passages without generating an answer

    Returns:
        QueryResult with answer and sources
    """
    effective_data_dir = resolve_data_dir(data_dir, load_config(config_path))
    if not os.path.exists(effective_data_dir):
        return QueryResult(
            success=False,
            query=question,
            error=f"Data directory not found: {effective_data_dir}. "
            "Run 'pocketscholar ingest' first.",
        )

    config = get_scholar_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return QueryResult(success=False, query=question, error=config.message)

    try:
        scholar = create_scholar(config)
    except Exception as e:
        return QueryResult(
            success=False, query=question, error=f"Failed to create PocketScholar: {e}"
        )

    try:
        return query_with_scholar(
            scholar,
            question,
            k=k,
            document_ids=document_ids,
            min_similarity=min_similarity,
            raw=raw,
        )
    finally:
        scholar.close()


def query_with_scholar(
    scholar: PocketScholar,
    question: str,
    k: int | None = None,
    document_ids: list[str] | None = None,
    min_similarity: float | None = None,
    raw: bool = False,
) -> QueryResult:
    """Answer a question using an existing PocketScholar instance.

    Args:
        scholar: Existing PocketScholar instance
        question: The question to ask
        k: Number of chunks to retrieve
        document_ids: Restrict the search to these documents
        min_similarity: Minimum relevance score
        raw: If True, skip generation and return passages

    Returns:
        QueryResult with answer and sources
    """
    try:
        if raw:
            ranked = scholar.retriever(use_llm=False).search(
                question, k, document_ids, min_similarity
            )
            # Sources are one per page; passages keep every chunk
            cited = RagResult.from_ranked(query=question, answer="", ranked=ranked)
            return QueryResult(
                success=True,
                query=question,
                sources=_to_sources(cited),
                passages=[
                    PassageResult(
                        document_id=r.chunk.document_id,
                        page_number=r.chunk.page_number,
                        score=r.score,
                        text=r.chunk.text,
                    )
                    for r in ranked
                ],
            )

        response = scholar.ask(question, k, document_ids, min_similarity)
    except Exception as e:
        return QueryResult(success=False, query=question, error=f"Query failed: {e}")

    return QueryResult(
        success=True,
        query=question,
        answer=response.answer,
        sources=_to_sources(response),
    )


def _to_sources(result: RagResult) -> list[SourceResult]:
    return [
        SourceResult(
            document_id=source.document_id,
            page_number=source.page_number,
            score=source.score,
        )
        for source in result.sources
    ]
