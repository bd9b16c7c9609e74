from __future__ import annotations
from pathlib import Path
from typing import IO, Iterator, Optional, Union
import gzip
import json

from ..utils.logging import get_logger

logger = get_logger(__name__)


def open_text_maybe_gzip(path: Union[str, Path]) -> IO[str]:
    path = Path(path)
    if path.suffixes[-1:] == [".gz"]:
        return gzip.open(path, "rt", encoding="utf-8", errors="ignore")
    return open(path, "r", encoding="utf-8", errors="ignore")


def _iter_lines(corpus_path: str) -> Iterator[str]:
    # Universal newlines: \r\n and a lone \r both end a line.
    with open_text_maybe_gzip(corpus_path) as f:
        for line in f:
            yield line.rstrip("\n")


def iter_text(
    corpus_path: str,
    fmt: str = "txt",
    text_key: str = "target",
    max_samples: Optional[int] = None,
) -> Iterator[str]:
    """Yield one request target (or request line) per corpus record.

    ``txt`` and ``jsonl`` files may be gzip-compressed (``.gz`` suffix).
    Records are not stripped: surrounding whitespace is significant to the
    classifier. Blank txt lines, null values and jsonl rows without
    ``text_key`` are skipped. ``max_samples=0`` yields nothing.
    """
    fmt = fmt.lower()
    if fmt == "txt":
        records = (s for s in _iter_lines(corpus_path) if s)
    elif fmt == "jsonl":
        records = _iter_jsonl(corpus_path, text_key)
    elif fmt == "parquet":
        records = _iter_parquet(corpus_path, text_key)
    else:
        raise ValueError(f"Unknown format: {fmt}. Use txt|jsonl|parquet.")

    n = 0
    for s in records:
        if max_samples is not None and n >= max_samples:
            return
        yield s
        n += 1


def _iter_jsonl(corpus_path: str, text_key: str) -> Iterator[str]:
    skipped = 0
    for line in _iter_lines(corpus_path):
        line = line.strip()
        if not line:
            continue
        obj = json.loads(line)
        if isinstance(obj, dict):
            value = obj.get(text_key)
        elif isinstance(obj, str):
            value = obj
        else:
            value = None
        if value is None:
            skipped += 1
            continue
        yield str(value)
    if skipped:
        logger.warning("%s: skipped %d jsonl rows without a %r value", corpus_path, skipped, text_key)


def _iter_parquet(corpus_path: str, text_key: str) -> Iterator[str]:
    try:
        import pyarrow.parquet as pq
    except Exception as e:
        raise RuntimeError("parquet support requires `pyarrow`. pip install pyarrow") from e
    pf = pq.ParquetFile(corpus_path)
    for batch in pf.iter_batches(columns=[text_key]):
        for s in batch.column(0).to_pylist():
            if s is None:
                continue
            yield str(s)
