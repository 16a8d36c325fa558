"""ID and name generators (CUID primary keys, payment proof object names)."""

from cuid2 import cuid_wrapper

from practice_access.shared.utils.datetime import utc_now

cuid_generator = cuid_wrapper()

PROOF_NAME_PREFIX = "payment_proof_"


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_proof_name(extension: str) -> str:
    """Return a unique, time-sortable object name for a payment proof.

    Names look like ``payment_proof_<epoch ms>_<cuid>.<ext>`` so that sorting
    a doctor's proofs by name orders them oldest first.
    """
    ext = extension.lower().lstrip(".") or "bin"
    millis = int(utc_now().timestamp() * 1000)
    return f"{PROOF_NAME_PREFIX}{millis:013d}_{generate_cuid()}.{ext}"
