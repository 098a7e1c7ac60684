"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# --- Privacy ---
MAX_BODY_LOG_CHARS: int = int(os.getenv("MAX_BODY_LOG_CHARS", "200"))

# --- Batch cleaning ---
BATCH_MAX_WORKERS: int = int(os.getenv("BATCH_MAX_WORKERS", "4"))
CLEANING_IO_DIR: str = os.getenv("CLEANING_IO_DIR", "cleaning_io")
VALIDATE_OUTPUT: bool = os.getenv("VALIDATE_OUTPUT", "true").lower() == "true"
