"""
Batch Cleaning — cleans many emails and summarizes the run.

Cleaning is pure and CPU-light, so a thread pool is enough; results keep
input order.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

import numpy as np

from src.cleaning.metrics import timed_stage
from src.cleaning.pipeline import clean_raw_email
from src.config.settings import BATCH_MAX_WORKERS
from src.models.cleaning import STAGE_ORDER, CleanedEmail, CleaningStageTag
from src.models.pipeline_version import PipelineVersion
from src.models.raw_email import RawEmail

logger = logging.getLogger(__name__)


def clean_batch(
    emails: Sequence[RawEmail],
    max_workers: Optional[int] = None,
) -> List[CleanedEmail]:
    """
    Clean every email in *emails*.

    Args:
        emails: Raw emails.
        max_workers: Thread pool size (defaults to BATCH_MAX_WORKERS).

    Returns:
        One CleanedEmail per input, in input order.
    """
    if not emails:
        return []

    workers = max_workers or BATCH_MAX_WORKERS
    if workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {workers}")

    with timed_stage("clean_batch"):
        if workers == 1:
            results = [clean_raw_email(email) for email in emails]
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(clean_raw_email, emails))

    logger.info("Cleaned %d email(s) with %d worker(s)", len(results), workers)
    return results


def summarize_batch(
    emails: Sequence[RawEmail],
    results: Sequence[CleanedEmail],
    pipeline_version: Optional[PipelineVersion] = None,
) -> Dict:
    """
    Aggregate statistics for a cleaned batch.

    Retention ratios are computed only for emails with a non-empty text body.

    Raises:
        ValueError: if *emails* and *results* differ in length.
    """
    if len(emails) != len(results):
        raise ValueError(f"emails ({len(emails)}) and results ({len(results)}) differ in length")

    version = pipeline_version or PipelineVersion()
    stage_counts = {tag.value: 0 for tag in STAGE_ORDER}
    for result in results:
        for tag in result.cleaning_applied:
            stage_counts[tag.value] += 1

    ratios = np.array(
        [
            len(result.cleaned_text) / len(email.text)
            for email, result in zip(emails, results)
            if email.text
        ],
        dtype=float,
    )

    count = len(results)
    fallbacks = stage_counts[CleaningStageTag.FALLBACK_TOO_AGGRESSIVE.value]

    return {
        "pipeline_version": version.to_dict(),
        "count": count,
        "forwarded": sum(1 for result in results if result.was_forwarded),
        "fallback_rate": round(fallbacks / count, 4) if count else 0.0,
        "stage_counts": stage_counts,
        "retention": {
            "mean": round(float(np.mean(ratios)), 4) if ratios.size else None,
            "median": round(float(np.median(ratios)), 4) if ratios.size else None,
            "p10": round(float(np.percentile(ratios, 10)), 4) if ratios.size else None,
        },
    }
