"""CLI entry point for game-engine-identifier."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .classifier import EngineClassifier
from .models import DetectionResult, EngineScore


def main(argv: list[str] | None = None) -> None:
    """Game Engine Identifier: detect a game's engine from its file listing."""
    parser = argparse.ArgumentParser(
        prog="game-engine-identifier",
        description="Identify a game's engine from its file listing.",
    )
    parser.add_argument("listing", nargs="?", default=None, help="Text file with one path per line ('-' for stdin).")
    parser.add_argument("--dir", dest="game_dir", default=None, help="Walk a game directory and classify its files.")
    parser.add_argument("--path", dest="inline_paths", action="append", default=None, help="Classify an inline path (repeatable).")
    parser.add_argument("--config", dest="config_path", default=None, help="Path to custom YAML/JSON engine profile.")
    parser.add_argument("--format", dest="output_format", choices=["json", "text"], default="json", help="Output format (default: json).")
    parser.add_argument("--output", dest="output_path", default=None, help="Write result to file instead of stdout.")
    parser.add_argument("--verbose", action="store_true", default=False, help="Include every engine's score in output.")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level for stderr (default: WARNING).")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.listing is None and args.game_dir is None and not args.inline_paths:
        parser.print_help()
        sys.exit(1)

    _cmd_identify(args)


def _cmd_identify(args: argparse.Namespace) -> None:
    """Execute classification."""
    if args.config_path:
        if not Path(args.config_path).is_file():
            print(f"Error: Config file not found: {args.config_path}", file=sys.stderr)
            sys.exit(2)
        try:
            classifier = EngineClassifier.from_config(args.config_path)
        except ValueError as e:
            print(f"Error: Invalid engine profile {args.config_path}: {e}", file=sys.stderr)
            sys.exit(2)
    else:
        classifier = EngineClassifier()

    files = _collect_files(args)
    result = classifier.classify(files)
    scores = classifier.scores(files) if args.verbose else None

    if args.output_format == "json":
        output_text = _format_json(result, scores)
    else:
        output_text = _format_text(result, scores)

    if args.output_path:
        with open(args.output_path, "w", encoding="utf-8") as f:
            f.write(output_text)
    else:
        print(output_text)


def _collect_files(args: argparse.Namespace) -> list[str]:
    """Gather paths from the listing file, the game directory and --path."""
    files: list[str] = []

    if args.listing is not None:
        if args.listing == "-":
            files.extend(_read_listing(sys.stdin))
        else:
            if not Path(args.listing).is_file():
                print(f"Error: File not found: {args.listing}", file=sys.stderr)
                sys.exit(2)
            try:
                with open(args.listing, encoding="utf-8") as f:
                    files.extend(_read_listing(f))
            except UnicodeDecodeError as e:
                print(f"Error: Listing is not valid UTF-8: {args.listing}: {e}", file=sys.stderr)
                sys.exit(2)

    if args.game_dir is not None:
        if not Path(args.game_dir).is_dir():
            print(f"Error: Directory not found: {args.game_dir}", file=sys.stderr)
            sys.exit(2)
        files.extend(walk_game_dir(args.game_dir))

    if args.inline_paths:
        files.extend(args.inline_paths)

    return files


def _read_listing(stream) -> list[str]:
    """One path per line; blank lines are skipped."""
    return [line.strip() for line in stream if line.strip()]


def walk_game_dir(root: str | Path) -> list[str]:
    """List files under root as '/'-separated paths relative to root."""
    root = Path(root)
    paths = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        rel_dir = Path(dirpath).relative_to(root)
        for name in sorted(filenames):
            paths.append((rel_dir / name).as_posix())
    return paths


def _format_json(result: DetectionResult, scores: list[EngineScore] | None) -> str:
    """Format a result as JSON."""
    record = result.to_dict()
    if scores is not None:
        record["scores"] = {s.name: s.score for s in scores}
    return json.dumps(record, indent=2)


def _format_text(result: DetectionResult, scores: list[EngineScore] | None) -> str:
    """Format a human-readable result."""
    lines = [
        f"Engine:     {result.engine}",
        f"Confidence: {result.confidence}",
    ]
    if result.matches:
        lines.append("")
        lines.append("Matched files:")
        for path in result.matches:
            lines.append(f"  {path}")
    if scores is not None:
        lines.append("")
        lines.append("Scores:")
        for s in sorted(scores, key=lambda s: s.score, reverse=True):
            lines.append(f"  {s.name:25} {s.score:>6}")
    return "\n".join(lines)
