"""
Batch runner for the email content normalization layer.

Reads:
  - <CLEANING_IO_DIR>/raw_emails.json      (array of raw email objects)

Writes:
  - <CLEANING_IO_DIR>/cleaned_emails.json  (cleaned emails + batch summary)
"""
import json
import logging
import sys
from pathlib import Path

from jsonschema import ValidationError, validate

from src.cleaning.batch import clean_batch, summarize_batch
from src.cleaning.validation import validate_cleaned_email
from src.config.schemas import RAW_EMAIL_BATCH_SCHEMA
from src.config.settings import CLEANING_IO_DIR, LOG_LEVEL, VALIDATE_OUTPUT
from src.models.pipeline_version import PipelineVersion
from src.models.raw_email import RawEmail

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger("run_cleaning")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
ROOT = Path(__file__).parent
IO_DIR = ROOT / CLEANING_IO_DIR

INPUT_FILE = IO_DIR / "raw_emails.json"
OUTPUT_FILE = IO_DIR / "cleaned_emails.json"


def main() -> int:
    logger.info("Loading input from %s", INPUT_FILE)
    with open(INPUT_FILE, encoding="utf-8") as f:
        payload = json.load(f)

    try:
        validate(instance=payload, schema=RAW_EMAIL_BATCH_SCHEMA)
    except ValidationError as e:
        logger.error("Input does not match the raw email schema: %s", e.message)
        return 1

    emails = [RawEmail.from_dict(item) for item in payload]
    logger.info("emails            : %d", len(emails))

    pipeline_version = PipelineVersion()
    logger.info("pipeline version  : %r", pipeline_version)

    results = clean_batch(emails)

    invalid = 0
    if VALIDATE_OUTPUT:
        for email, result in zip(emails, results):
            report = validate_cleaned_email(result, email.text)
            if not report.valid:
                invalid += 1
                logger.warning("message %s: %s", email.message_id or "<no id>", report.errors)

    summary = summarize_batch(emails, results, pipeline_version)
    output = {
        "cleaner_version": pipeline_version.to_dict(),
        "results": [
            {"message_id": email.message_id, **result.to_dict()}
            for email, result in zip(emails, results)
        ],
        "summary": summary,
    }

    with open(OUTPUT_FILE, "w", encoding="utf-8") as f:
        json.dump(output, f, ensure_ascii=False, indent=2)
    logger.info("Output saved to: %s", OUTPUT_FILE)

    print("\n" + "=" * 70)
    print("EMAIL CLEANING — SUMMARY")
    print("=" * 70)
    print(f"emails        : {summary['count']}")
    print(f"forwarded     : {summary['forwarded']}")
    print(f"fallback rate : {summary['fallback_rate']:.2%}")
    if summary["retention"]["mean"] is not None:
        print(f"retention     : mean={summary['retention']['mean']:.2f}  "
              f"median={summary['retention']['median']:.2f}  p10={summary['retention']['p10']:.2f}")
    print("\nStages:")
    for stage, count in summary["stage_counts"].items():
        print(f"  {stage:24s} {count}")
    if invalid:
        print(f"\nInvalid results: {invalid}")
    print("=" * 70 + "\n")

    return 1 if invalid else 0


if __name__ == "__main__":
    sys.exit(main())
