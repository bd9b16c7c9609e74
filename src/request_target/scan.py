from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .config import ScanConfig
from .io.data import iter_text
from .target import InvalidTarget, RequestTargetKind, classify
from .utils.logging import get_logger

logger = get_logger(__name__)

REASON_MISSING_TARGET = "missing target"
INVALID = "invalid"


def split_request_line(line: str) -> Tuple[str, str, str]:
    """Split ``METHOD SP request-target SP HTTP-version`` into its three fields.

    Only single SP characters separate fields, and the target is everything
    between the first and the last SP. Extra spaces therefore stay on the
    target for the classifier to reject. Missing fields come back as empty
    strings.
    """
    method, _, rest = line.partition(" ")
    if " " in rest:
        target, _, version = rest.rpartition(" ")
    else:
        target, version = rest, ""
    return method, target, version


@dataclass(frozen=True)
class ScanRecord:
    text: str
    kind: Optional[RequestTargetKind]
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is not None


def iter_classified(texts: Iterable[str], input_mode: str = "target") -> Iterator[ScanRecord]:
    for text in texts:
        if input_mode == "request_line":
            target = split_request_line(text)[1]
            if not target:
                yield ScanRecord(text=text, kind=None, reason=REASON_MISSING_TARGET)
                continue
        else:
            target = text
        try:
            yield ScanRecord(text=text, kind=classify(target))
        except InvalidTarget as e:
            yield ScanRecord(text=text, kind=None, reason=e.reason)


@dataclass
class ScanReport:
    config: ScanConfig
    counts: Counter = field(default_factory=Counter)
    examples: List[Dict[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def invalid(self) -> int:
        return self.counts[INVALID]

    def add(self, rec: ScanRecord) -> None:
        if rec.ok:
            self.counts[rec.kind.value] += 1
            return
        self.counts[INVALID] += 1
        if len(self.examples) < self.config.keep_examples:
            self.examples.append({"text": rec.text, "reason": rec.reason or ""})

    def to_dict(self) -> Dict[str, Any]:
        counts = {kind.value: self.counts[kind.value] for kind in RequestTargetKind}
        counts[INVALID] = self.invalid
        return {
            "config": self.config.to_dict(),
            "total": self.total,
            "counts": counts,
            "invalid_examples": list(self.examples),
        }


def scan_texts(texts: Iterable[str], config: ScanConfig) -> ScanReport:
    report = ScanReport(config=config)
    interval = max(config.progress_interval, 1)
    for rec in iter_classified(texts, input_mode=config.input_mode):
        report.add(rec)
        if report.total % interval == 0:
            logger.debug("scanned %d records (%d invalid)", report.total, report.invalid)
    logger.info("scanned %d records: %d invalid", report.total, report.invalid)
    return report


def scan_corpus(config: ScanConfig, corpus_path: str) -> ScanReport:
    texts = iter_text(
        corpus_path,
        fmt=config.fmt,
        text_key=config.text_key,
        max_samples=config.max_samples,
    )
    return scan_texts(texts, config)
