"""Formatting helpers and a small command line tool for save slots."""

from __future__ import annotations

import argparse
import math
import sys
from pathlib import Path
from typing import Sequence, SupportsFloat

from .context import DEFAULT_SAVE_KEY
from .storage import SaveStore


def format_number(value: SupportsFloat) -> str:
    """Compact ``value`` for narration: ``1.5K``, ``2.30M``, ``1.00B``."""

    number = float(value)
    magnitude = abs(number)
    if magnitude >= 1e9:
        return f"{number / 1e9:.2f}B"
    if magnitude >= 1e6:
        return f"{number / 1e6:.2f}M"
    if magnitude >= 1e3:
        return f"{number / 1e3:.1f}K"
    return str(math.floor(number))


def format_time(seconds: SupportsFloat) -> str:
    total = int(float(seconds))
    if total < 60:
        return f"{total}s"
    if total < 3600:
        return f"{total // 60}m {total % 60}s"
    hours, remainder = divmod(total, 3600)
    return f"{hours}h {remainder // 60}m"


def format_percent(value: SupportsFloat) -> str:
    return f"{float(value) * 100:.1f}%"


def progress_bar(current: float, total: float, width: int = 12) -> str:
    if total <= 0:
        return "▱" * width
    filled = max(0, min(width, round(width * current / total)))
    return "▰" * filled + "▱" * (width - filled)


# ---------------------------------------------------------------------------
# Save slot CLI
# ---------------------------------------------------------------------------


def _store(args: argparse.Namespace) -> SaveStore:
    root = Path(args.data_root).expanduser() if args.data_root else None
    return SaveStore(root, args.save_key)


def _command_show(args: argparse.Namespace) -> int:
    store = _store(args)
    state = store.load()
    if state is None:
        print(f"No usable save at {store.path}.")
        return 1
    character = state.character
    print(f"{character.name} ({character.spirit_root.name}, {character.body_type.name})")
    print(f"  Location: {state.location}")
    print(f"  Spirit Stones: {format_number(state.spirit_stones)}")
    print(f"  Rebirths: {character.rebirth_count}  Legacy: {format_percent(character.legacy_bonus)}")
    for progress in sorted(state.unlocked_paths(), key=lambda item: item.path_key):
        print(
            f"  - {progress.path_key}: level {progress.level} "
            f"{progress_bar(progress.xp, progress.xp_required)}"
        )
    return 0


def _command_export(args: argparse.Namespace) -> int:
    store = _store(args)
    state = store.load()
    if state is None:
        print(f"No usable save at {store.path}.", file=sys.stderr)
        return 1
    text = store.export_text(state)
    if args.output:
        output = Path(args.output)
        if output.exists() and not args.force:
            print(f"{output} already exists; use --force to overwrite.", file=sys.stderr)
            return 2
        output.write_text(text + "\n", encoding="utf8")
        print(f"Exported save to {output}")
    else:
        print(text)
    return 0


def _command_import(args: argparse.Namespace) -> int:
    store = _store(args)
    text = Path(args.input).read_text(encoding="utf8")
    state = store.import_text(text)
    if state is None:
        print("The provided save could not be decoded.", file=sys.stderr)
        return 1
    if store.exists() and not args.force:
        print(f"{store.path} already exists; use --force to overwrite.", file=sys.stderr)
        return 2
    if not store.save(state):
        return 1
    print(f"Imported save for {state.character.name} into {store.path}")
    return 0


def _command_delete(args: argparse.Namespace) -> int:
    store = _store(args)
    if not store.exists():
        print(f"No save found at {store.path}.", file=sys.stderr)
        return 1
    if not args.force:
        response = input(
            f"Delete {store.path}? This cannot be undone. Type 'yes' to confirm: "
        ).strip()
        if response.lower() != "yes":
            print("Aborted.")
            return 3
    store.delete()
    print(f"Deleted save: {store.path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage Grand Dao save slots.")
    parser.add_argument("--data-root", help="Directory holding save files")
    parser.add_argument(
        "--save-key",
        default=DEFAULT_SAVE_KEY,
        help=f"Save slot name (default: {DEFAULT_SAVE_KEY})",
    )

    subparsers = parser.add_subparsers(dest="command")

    show_parser = subparsers.add_parser("show", help="Summarise the stored cultivator")
    show_parser.set_defaults(func=_command_show)

    export_parser = subparsers.add_parser("export", help="Print or write the save as text")
    export_parser.add_argument("--output", help="Write the export to this file")
    export_parser.add_argument(
        "--force", action="store_true", help="Overwrite the output file if it exists"
    )
    export_parser.set_defaults(func=_command_export)

    import_parser = subparsers.add_parser("import", help="Load a text export into the slot")
    import_parser.add_argument("--input", required=True, help="File containing the export text")
    import_parser.add_argument("--force", action="store_true", help="Replace an existing save")
    import_parser.set_defaults(func=_command_import)

    delete_parser = subparsers.add_parser("delete", help="Remove the save slot")
    delete_parser.add_argument(
        "--force", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=_command_delete)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        parser.print_help()
        return 0
    return args.func(args)


__all__ = [
    "build_parser",
    "format_number",
    "format_percent",
    "format_time",
    "main",
    "progress_bar",
]


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
