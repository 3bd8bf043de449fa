"""CLI entrypoint for editing and checking date-keyed Tamil crosswords."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from tamil_crossword.core.constants import DEFAULT_GRID_SIZE, Direction
from tamil_crossword.core.exceptions import CrosswordError
from tamil_crossword.data.graphemes import GraphemeSplitter, SplitStrategy
from tamil_crossword.engine.evaluation import EvaluationEngine, SolveSession
from tamil_crossword.engine.grid import GridConfig
from tamil_crossword.engine.placement import PlacementEngine
from tamil_crossword.engine.puzzle import PuzzleModel
from tamil_crossword.io.backend_client import BACKEND_URL_ENV, BackendConfig, RemotePuzzleStore
from tamil_crossword.io.snapshot import dumps, from_snapshot, loads, to_snapshot
from tamil_crossword.io.store import (DEFAULT_STORE_DIR, LocalPuzzleStore, PuzzleGateway,
                                      WriteThroughStore, today_key)
from tamil_crossword.utils.logger import configure_logging, get_logger
from tamil_crossword.utils.pretty import pretty_print_puzzle, print_evaluation


LOGGER = get_logger("tamil_crossword.cli")


def parse_answers_file(path: Path) -> Dict[Tuple[int, int], str]:
    """Read ``{"row,col": "text"}`` solver input."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    inputs: Dict[Tuple[int, int], str] = {}
    for key, value in raw.items():
        row, col = (int(part) for part in key.split(","))
        inputs[(row, col)] = value
    return inputs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Place and score Tamil crossword puzzles",
    )
    parser.add_argument("--date", type=str, default=None, help="Puzzle key (default: today, UTC)")
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=DEFAULT_STORE_DIR,
        help="Directory holding local puzzle snapshots",
    )
    parser.add_argument(
        "--backend-url",
        type=str,
        default=None,
        help=f"Use the remote backend (default: ${BACKEND_URL_ENV} when set)",
    )
    parser.add_argument(
        "--no-local-copy",
        action="store_true",
        help="With a backend, skip writing the local snapshot as well",
    )
    parser.add_argument("--grid-size", type=int, default=DEFAULT_GRID_SIZE, help="Grid side length")
    parser.add_argument(
        "--codepoint-split",
        action="store_true",
        help="Split answers per codepoint instead of per grapheme cluster",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Add a clue and answer")
    add.add_argument("--clue", required=True)
    add.add_argument("--answer", required=True)
    add.add_argument("--row", type=int, help="Anchor row (0-based)")
    add.add_argument("--col", type=int, help="Anchor column (0-based)")
    add.add_argument(
        "--direction",
        type=str,
        choices=[d.value.lower() for d in Direction],
        help="Word direction for manual placement",
    )
    add.add_argument("--length", type=int, help="Expected number of letters")

    delete = commands.add_parser("delete", help="Delete a clue by number")
    delete.add_argument("number", type=int)

    edit = commands.add_parser("edit", help="Edit a clue's text or answer")
    edit.add_argument("number", type=int)
    edit.add_argument("--clue")
    edit.add_argument("--answer")

    show = commands.add_parser("show", help="Print the puzzle")
    show.add_argument("--json", action="store_true", help="Print the snapshot document")

    check = commands.add_parser("check", help="Score a solver answers file")
    check.add_argument("answers", type=Path, help='JSON object of {"row,col": "text"}')
    check.add_argument("--json", action="store_true", help="Print the result as JSON")

    imported = commands.add_parser("import", help="Validate a snapshot file and store it")
    imported.add_argument("snapshot", type=Path)

    commands.add_parser("list", help="List locally stored puzzle keys")
    return parser


def open_gateway(args: argparse.Namespace) -> PuzzleGateway:
    local = LocalPuzzleStore(args.store_dir)
    if not (args.backend_url or os.environ.get(BACKEND_URL_ENV)):
        return local
    remote = RemotePuzzleStore(BackendConfig.from_env(base_url=args.backend_url))
    if args.no_local_copy:
        return remote
    return WriteThroughStore(remote, local)


def load_engine(
    gateway: PuzzleGateway,
    key: str,
    splitter: GraphemeSplitter,
    config: GridConfig,
) -> PlacementEngine:
    engine = PlacementEngine(PuzzleModel(config, date_key=key), splitter)
    snapshot = gateway.load(key)
    if snapshot is not None:
        engine.replace_model(from_snapshot(snapshot, splitter=splitter, config=config))
    return engine


def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.command == "list":
        for key in LocalPuzzleStore(args.store_dir).keys():
            print(key)
        return 0

    key = args.date or today_key()
    strategy = SplitStrategy.CODEPOINT if args.codepoint_split else SplitStrategy.CLUSTER
    splitter = GraphemeSplitter(strategy)
    config = GridConfig(size=args.grid_size)
    gateway = open_gateway(args)

    if args.command == "import":
        model = loads(args.snapshot.read_text(encoding="utf-8"), splitter=splitter, config=config)
        engine = PlacementEngine(splitter=splitter)
        engine.replace_model(model)
    else:
        engine = load_engine(gateway, key, splitter, config)

    if args.command == "show":
        if args.json:
            print(dumps(engine.model))
        else:
            pretty_print_puzzle(engine.model, label=f"Puzzle {key}")
        return 0

    if args.command == "check":
        session = SolveSession(engine.model, EvaluationEngine(splitter))
        for (row, col), text in parse_answers_file(args.answers).items():
            session.enter(row, col, text)
        result = session.finalize()
        if args.json:
            print(json.dumps(result.to_jsonable(), ensure_ascii=False, indent=2))
        else:
            print_evaluation(engine.model, result)
        return 0

    if args.command == "add":
        coords: List[Optional[int]] = [args.row, args.col]
        manual = any(value is not None for value in coords) or args.direction
        if manual and (None in coords or not args.direction):
            parser.error("manual placement needs --row, --col and --direction together")
        if manual:
            entry = engine.place_manual(
                args.answer, args.clue, args.row, args.col, args.direction, args.length
            )
        else:
            entry = engine.place_auto(args.answer, args.clue, args.length)
        print(f"Placed {entry.answer} {entry.direction.value} at {entry.row},{entry.col}")
    elif args.command == "delete":
        engine.delete_entry(args.number - 1)
    elif args.command == "edit":
        if args.clue is None and args.answer is None:
            parser.error("edit needs --clue and/or --answer")
        engine.edit_entry(args.number - 1, clue=args.clue, answer=args.answer)

    gateway.save(key, to_snapshot(engine.model, date_key=key))
    pretty_print_puzzle(engine.model, label=f"Puzzle {key}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)
    try:
        return run(args, parser)
    except (CrosswordError, IndexError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
