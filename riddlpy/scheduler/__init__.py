"""Revalidation scheduling."""

from riddlpy.scheduler.revalidation import PendingValidation, RevalidationScheduler, validate_document

__all__ = ["PendingValidation", "RevalidationScheduler", "validate_document"]
