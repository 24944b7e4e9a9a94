from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from pydantic import ValidationError

from .errors import ParseError
from .models.config import LexerConfig
from .models.token import ScanSummary

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbosity: int) -> logging.Logger:
    """Configure the ``seqcursor`` logger namespace for console output."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logger = logging.getLogger("seqcursor")
    logger.setLevel(level)
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def _lexer_config(args) -> LexerConfig:
    return LexerConfig(
        keep_whitespace=args.keep_whitespace,
        keep_comments=args.keep_comments,
        max_tokens=args.max_tokens,
    )


def cmd_tokens(args):
    from .text.lexer import tokenize
    text = Path(args.input).read_text(encoding="utf-8")
    tokens = tokenize(text, _lexer_config(args))
    if args.summary:
        s = ScanSummary.from_tokens(tokens)
        kinds = ", ".join(f"{k.value}={n}" for k, n in s.by_kind.items())
        print(f"tokens={s.tokens}" + (f" ({kinds})" if kinds else ""))
        return 0
    print(json.dumps([t.model_dump(mode="json") for t in tokens], indent=2))
    return 0


def cmd_frames(args):
    from .binary.frames import iter_frames
    frames = list(iter_frames(args.input, max_frames=args.max_frames))
    if args.summary:
        print(f"frames={len(frames)}, payload_bytes={sum(len(f.payload) for f in frames)}")
        return 0
    print(json.dumps([f.model_dump(mode="json") for f in frames], indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seqcursor", description="cursor-based scanning utilities")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("tokens", help="tokenize a UTF-8 text file and print tokens as JSON")
    sp.add_argument("input", help="Path to a UTF-8 text file")
    sp.add_argument("--keep-whitespace", action="store_true", help="Emit whitespace tokens")
    sp.add_argument("--keep-comments", action="store_true", help="Emit comment tokens")
    sp.add_argument("--max-tokens", type=int, default=None, help="Stop after N tokens")
    sp.add_argument("--summary", action="store_true", help="Print token counts per kind only")
    sp.set_defaults(func=cmd_tokens)

    sp = sub.add_parser("frames", help="list type-length-value frames of a binary file")
    sp.add_argument("input", help="Path to a binary file")
    sp.add_argument("--max-frames", type=int, default=None, help="Stop after N frames")
    sp.add_argument("--summary", action="store_true", help="Print frame and payload byte counts only")
    sp.set_defaults(func=cmd_frames)

    return p


def main(argv=None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    setup_logging(ns.verbose)
    try:
        return ns.func(ns)
    except (ParseError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
