"""Submission module: registrant submissions, resolution, and tabular views."""

from src.modules.submission.service import SubmissionService

__all__ = [
    "SubmissionService",
]
