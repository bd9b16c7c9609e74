from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..config import FORMATS, INPUT_MODES, ScanConfig
from ..scan import scan_corpus
from ..target import InvalidTarget, classify
from ..utils.logging import configure_logging


def _add_global_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g., INFO, DEBUG). Also respects REQUEST_TARGET_LOG_LEVEL env var.",
    )


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected an integer >= 1, got {value}")
    return n


def _add_corpus_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--corpus", required=True, help="Path to corpus file")
    p.add_argument("--format", default="txt", choices=list(FORMATS))
    p.add_argument("--text-key", default="target")
    p.add_argument("--max-samples", type=_positive_int, default=None)


def _load_scan_config(args: argparse.Namespace) -> ScanConfig:
    if args.config:
        return ScanConfig.from_json(Path(args.config).read_text(encoding="utf-8"))
    return ScanConfig(
        fmt=str(args.format),
        text_key=str(args.text_key),
        input_mode=str(args.input_mode),
        max_samples=int(args.max_samples) if args.max_samples is not None else None,
        keep_examples=int(args.keep_examples),
    )


def cmd_classify(args: argparse.Namespace) -> int:
    configure_logging(args.log_level)
    failed = 0
    for target in args.targets:
        try:
            kind = classify(target)
        except InvalidTarget as e:
            print(f"[FAIL] invalid target {target!r}: {e.reason}")
            failed += 1
            continue
        print(f"{kind.value}\t{target}")
    return 2 if failed else 0


def cmd_scan(args: argparse.Namespace) -> int:
    configure_logging(args.log_level)
    cfg = _load_scan_config(args)
    report = scan_corpus(cfg, str(args.corpus))
    out = json.dumps(report.to_dict(), ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        Path(args.out).write_text(out + "\n", encoding="utf-8")
        print(f"[OK] wrote: {args.out}")
    else:
        sys.stdout.write(out + "\n")
    if args.fail_on_invalid and report.invalid:
        print(f"[FAIL] {report.invalid} of {report.total} targets are invalid", file=sys.stderr)
        return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="request-target", description="HTTP request-target classifier")
    _add_global_args(p)

    sub = p.add_subparsers(dest="cmd", required=True)

    cls = sub.add_parser("classify", help="Classify request targets given as arguments")
    cls.add_argument("targets", nargs="+", help="Request-target tokens (quote to keep whitespace)")
    cls.set_defaults(func=cmd_classify)

    scan = sub.add_parser("scan", help="Classify every target in a corpus and report counts")
    _add_corpus_args(scan)
    scan.add_argument("--config", default=None, help="Optional ScanConfig JSON file. Overrides flags above.")
    scan.add_argument("--input-mode", default="target", choices=list(INPUT_MODES))
    scan.add_argument("--keep-examples", type=int, default=3, help="Invalid examples kept in the report.")
    scan.add_argument("--out", default=None, help="Write the JSON report here. Default: stdout.")
    scan.add_argument("--fail-on-invalid", action="store_true", help="Exit with status 2 if any target is invalid.")
    scan.set_defaults(func=cmd_scan)

    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    rc = args.func(args)
    if rc:
        raise SystemExit(rc)


if __name__ == "__main__":
    main()
