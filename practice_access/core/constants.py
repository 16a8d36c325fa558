"""Application-wide constants."""

# Payment proof uploads: accepted content types mapped to the stored file extension.
PROOF_CONTENT_TYPES: dict[str, str] = {
    "application/pdf": "pdf",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
}

# Header the scheduler sends to trigger the expiry sweep.
SCHEDULER_SECRET_HEADER = "X-Scheduler-Secret"
