"""Loading several GPX documents together.

Each document goes through its own parse-and-compute pipeline; a failure in
one never affects the others, and the caller gets every outcome back.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Union

from .gpx import MalformedDocument, parse_gpx
from .models import BatchResult, Tour, TourFailure
from .stats import compute_statistics

logger = logging.getLogger(__name__)

GPX_SUFFIX = ".gpx"


def load_tour(document_text: str, source_id: str) -> Tour:
    """Parse a GPX document and compute its statistics."""
    return compute_statistics(parse_gpx(document_text, source_id))


def _run_pipeline(document_text: str, source_id: str) -> Union[Tour, TourFailure]:
    try:
        return load_tour(document_text, source_id)
    except MalformedDocument as e:
        logger.warning("Failed to parse %s: %s", source_id, e.reason)
        return TourFailure(source_id=source_id, reason=e.reason)
    except Exception as e:
        logger.exception("Unexpected error loading %s", source_id)
        return TourFailure(source_id=source_id, reason=f"Unexpected error: {e}")


async def load_tours(
    documents: Iterable[tuple[str, str]],
    max_workers: int = 4,
) -> BatchResult:
    """Load (text, source_id) pairs concurrently and collect all outcomes.

    Waits for every document before returning. Tours and failures are each
    reported in input order.
    """
    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def run(text: str, source_id: str):
        async with semaphore:
            return await asyncio.to_thread(_run_pipeline, text, source_id)

    outcomes = await asyncio.gather(*(run(text, sid) for text, sid in documents))

    result = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, TourFailure):
            result.failures.append(outcome)
        else:
            result.tours.append(outcome)
    logger.info("Loaded %d tour(s), %d failure(s)", len(result.tours), len(result.failures))
    return result


def read_documents(paths: Iterable[str]) -> tuple[list[tuple[str, str]], list[TourFailure]]:
    """Read GPX files from disk as (text, file name) pairs.

    Files without a .gpx extension or that cannot be read are returned as
    failures instead.
    """
    documents: list[tuple[str, str]] = []
    failures: list[TourFailure] = []
    for raw in paths:
        path = Path(raw).expanduser()
        if path.suffix.lower() != GPX_SUFFIX:
            failures.append(TourFailure(source_id=path.name, reason="Not a .gpx file"))
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            failures.append(TourFailure(source_id=path.name, reason="Failed to read file"))
            continue
        documents.append((text, path.name))
    return documents, failures
