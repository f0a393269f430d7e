"""
Application layer package.

Contains service classes that orchestrate the audit workflow.
Services coordinate between domain models and infrastructure.
"""

from venueaudit.application.draft_service import DraftSession
from venueaudit.application.finalize_service import FinalizeService, FinalizeResult
from venueaudit.application.history_service import HistoryService
from venueaudit.application.action_service import ActionTracker
from venueaudit.application.deep_clean_service import DeepCleanScheduler
from venueaudit.application.evidence_capture import EvidenceCapture, encode_image
from venueaudit.application.container import Container

__all__ = [
    "DraftSession",
    "FinalizeService",
    "FinalizeResult",
    "HistoryService",
    "ActionTracker",
    "DeepCleanScheduler",
    "EvidenceCapture",
    "encode_image",
    "Container",
]
