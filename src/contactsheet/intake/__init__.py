from .health import HealthStatus, check_sheet_health
from .parsing import JsonBody, NamedParams, SubmissionRequest, UrlEncodedBody, parse_payload
from .pipeline import IntakePipeline, IntakeResult, zone_clock
from .submission import Submission, build_submission

__all__ = [
    "HealthStatus",
    "IntakePipeline",
    "IntakeResult",
    "JsonBody",
    "NamedParams",
    "Submission",
    "SubmissionRequest",
    "UrlEncodedBody",
    "build_submission",
    "check_sheet_health",
    "parse_payload",
    "zone_clock",
]
