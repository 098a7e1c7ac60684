"""
Unit tests for src.cleaning.batch.
"""
import pytest

from src.cleaning.batch import clean_batch, summarize_batch
from src.cleaning.pipeline import clean_raw_email


class TestCleanBatch:
    def test_empty(self):
        assert clean_batch([]) == []

    def test_preserves_order(self, raw_emails):
        results = clean_batch(raw_emails, max_workers=3)
        assert results == [clean_raw_email(email) for email in raw_emails]

    def test_single_worker(self, raw_emails):
        results = clean_batch(raw_emails, max_workers=1)
        assert [r.cleaned_text for r in results][1] == "Hello there, thanks."

    def test_invalid_worker_count(self, raw_emails):
        with pytest.raises(ValueError):
            clean_batch(raw_emails, max_workers=-1)


class TestSummarizeBatch:
    def test_counts(self, raw_emails, pipeline_version):
        results = clean_batch(raw_emails)
        summary = summarize_batch(raw_emails, results, pipeline_version)
        assert summary["count"] == 3
        assert summary["forwarded"] == 1
        assert summary["fallback_rate"] == 0.0
        assert summary["stage_counts"]["forwarded_wrapper"] == 1
        assert summary["stage_counts"]["disclaimers"] == 1
        assert summary["stage_counts"]["signatures"] == 0
        assert 0.0 < summary["retention"]["p10"] <= summary["retention"]["median"] <= 1.0
        assert summary["pipeline_version"]["markersversion"] == "markers-test"

    def test_length_mismatch(self, raw_emails):
        with pytest.raises(ValueError):
            summarize_batch(raw_emails, [])

    def test_empty_batch(self):
        summary = summarize_batch([], [])
        assert summary["count"] == 0
        assert summary["fallback_rate"] == 0.0
        assert summary["retention"]["mean"] is None
