from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional
import json

FORMATS = ("txt", "jsonl", "parquet")
INPUT_MODES = ("target", "request_line")


@dataclass(frozen=True)
class ScanConfig:
    """Settings for classifying a corpus of request targets.

    ``input_mode`` selects what each record holds: a bare request-target token
    (``target``) or a whole start line such as ``GET /a HTTP/1.1``
    (``request_line``), from which the middle token is taken.
    """

    schema_version: str = "scan.v1"
    fmt: str = "txt"
    text_key: str = "target"
    input_mode: str = "target"
    max_samples: Optional[int] = None

    # Reporting
    keep_examples: int = 3
    progress_interval: int = 10_000

    def __post_init__(self) -> None:
        if self.fmt not in FORMATS:
            raise ValueError(f"Unknown format: {self.fmt}. Use {'|'.join(FORMATS)}.")
        if self.input_mode not in INPUT_MODES:
            raise ValueError(f"Unknown input mode: {self.input_mode}. Use {'|'.join(INPUT_MODES)}.")
        if self.max_samples is not None and self.max_samples < 1:
            raise ValueError(f"max_samples must be >= 1 or None, got {self.max_samples}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ScanConfig":
        unknown = sorted(set(d) - {f.name for f in fields(ScanConfig)})
        if unknown:
            raise ValueError(f"Unknown ScanConfig keys: {', '.join(unknown)}")
        return ScanConfig(**d)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)

    @staticmethod
    def from_json(s: str) -> "ScanConfig":
        return ScanConfig.from_dict(json.loads(s))
