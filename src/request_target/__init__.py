"""HTTP request-target classification.

Structure
- request_target.target: the classifier (RequestTargetKind, classify, InvalidTarget)
- request_target.scan: batch classification of corpora
- request_target.io: corpus readers
- request_target.cli: `request-target` command
"""

__version__ = "0.1.0"

from .target import InvalidTarget, RequestTargetKind, classify
from .config import ScanConfig
from .scan import ScanReport, scan_corpus, split_request_line

__all__ = [
    "__version__",
    "InvalidTarget",
    "RequestTargetKind",
    "classify",
    "ScanConfig",
    "ScanReport",
    "scan_corpus",
    "split_request_line",
]
