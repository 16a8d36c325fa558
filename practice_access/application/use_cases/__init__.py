"""Use cases: batch jobs run by the scheduler or scripts."""

from practice_access.application.use_cases.run_expiry_sweep import RunExpirySweepUseCase

__all__ = ["RunExpirySweepUseCase"]
