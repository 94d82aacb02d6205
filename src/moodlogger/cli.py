from __future__ import annotations

import argparse
import csv
import stat
import sys
from pathlib import Path
from typing import Any

from .config import configure_logging, load_settings
from .controller import MoodJournal
from .models import INTENSITY_MAX, INTENSITY_MIN, MOODS, MoodEntry, ValidationError, check_intensity
from .paths import data_path_reason
from .repository import EntryRepository
from .safety import assert_safe_data_path
from .storage import COUNTS_KEY, ENTRIES_KEY, JsonFileStore
from .timeparse import entry_date
from .view import CHART_TYPES, ascii_chart, render_text


# -------------------------
# Wiring
# -------------------------

def _warn(message: str) -> None:
    print(f"⚠️ {message}", file=sys.stderr)


def _repo(args: argparse.Namespace) -> EntryRepository:
    return EntryRepository(JsonFileStore(args.data_path))


def _journal(args: argparse.Namespace, confirmed: bool = False) -> MoodJournal:
    return MoodJournal(
        _repo(args),
        confirm=lambda _msg: confirmed,
        notify=_warn,
        chart_type=getattr(args, "chart_type", None) or args.settings.chart_type,
    )


# -------------------------
# Print blocks
# -------------------------

def _entry_line(index: int, entry: MoodEntry) -> str:
    intensity = entry.intensity if entry.intensity is not None else "—"
    return f"[{index}] {entry.date} — {entry.heading} ({intensity}/{INTENSITY_MAX}): {entry.text}"


def _print_entry_block(index: int, entry: MoodEntry) -> None:
    print("```")
    print(f"📒 Mood Entry #{index}")
    print(f"- 📅 Date: {entry.date}")
    print(f"- {entry.emoji} Mood: {entry.mood.label}")
    if entry.intensity is not None:
        print(f"- 🌡️ Intensity ({INTENSITY_MIN}–{INTENSITY_MAX}): {entry.intensity}")
    print(f"- 📝 Note: {entry.text}")
    print("```")


# -------------------------
# CSV helpers
# -------------------------

ENTRY_CSV_FIELDS = ["index", "date", "mood", "emoji", "intensity", "text"]


def _write_csv(out_path: Path, fieldnames: list[str], rows: list[dict[str, Any]]) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames, quoting=csv.QUOTE_MINIMAL)
        w.writeheader()
        if rows:
            w.writerows(rows)


# -------------------------
# Entry commands
# -------------------------

def cmd_add(args: argparse.Namespace) -> None:
    intensity = check_intensity(args.intensity)
    day = entry_date(args.date)

    journal = _journal(args)
    journal.today = lambda: day
    journal.select_mood(args.mood)
    journal.set_text(args.text)
    journal.set_intensity(intensity)
    if not journal.save():
        raise SystemExit(1)

    entry = journal.repo.list()[0]
    if args.format == "block":
        _print_entry_block(0, entry)
    else:
        print(f"{entry.emoji} Logged {entry.mood.value} ({entry.intensity}/{INTENSITY_MAX}) on {entry.date}")


def cmd_list(args: argparse.Namespace) -> None:
    entries = _repo(args).list()
    if not entries:
        print("No mood entries yet.")
        return

    if args.format == "block":
        for i, e in enumerate(entries[: args.limit]):
            _print_entry_block(i, e)
        return

    print("=== Mood Log (newest first) ===")
    for i, e in enumerate(entries[: args.limit]):
        print(_entry_line(i, e))


def cmd_edit(args: argparse.Namespace) -> None:
    journal = _journal(args)
    if not journal.edit(args.index):
        print(f"No entry at index {args.index}; nothing changed.")
        return

    if args.mood:
        journal.select_mood(args.mood)
    if args.text is not None:
        journal.set_text(args.text)
    if not journal.save():
        raise SystemExit(1)

    print(_entry_line(args.index, journal.repo.list()[args.index]))


def cmd_delete(args: argparse.Namespace) -> None:
    if not args.yes:
        raise SystemExit("Refusing to delete without --yes.")

    journal = _journal(args, confirmed=True)
    target = journal.repo.get(args.index)
    if target is None or not journal.delete(args.index):
        print(f"No entry at index {args.index}; nothing changed.")
        return
    print(f"🗑️ Deleted: {_entry_line(args.index, target)}")


def cmd_reset(args: argparse.Namespace) -> None:
    if not args.yes:
        raise SystemExit("Refusing to reset without --yes (this deletes all mood entries and counts).")

    journal = _journal(args, confirmed=True)
    before = len(journal.repo.list())
    journal.reset()
    print(f"🧹 Mood reset: deleted {before} entries.")


def cmd_chart(args: argparse.Namespace) -> None:
    view = _journal(args).view()
    print(f"=== {view.chart.title} ({view.chart.kind}) ===")
    for line in ascii_chart(view.chart):
        print(line)


def cmd_export(args: argparse.Namespace) -> None:
    out_path = Path(args.csv).expanduser().resolve()
    entries = _repo(args).list()
    rows = [
        {
            "index": i,
            "date": e.date,
            "mood": e.mood.value,
            "emoji": e.emoji,
            "intensity": "" if e.intensity is None else e.intensity,
            "text": e.text,
        }
        for i, e in enumerate(entries)
    ]
    _write_csv(out_path, ENTRY_CSV_FIELDS, rows)
    if rows:
        print(f"📄 Exported {len(rows)} entries → {out_path}")
    else:
        print(f"📄 Exported header-only CSV (no entries) → {out_path}")


# -------------------------
# Core commands
# -------------------------

def cmd_init(args: argparse.Namespace) -> None:
    store = JsonFileStore(args.data_path)
    if store.load(ENTRIES_KEY) is None:
        store.save(ENTRIES_KEY, [])
    if store.load(COUNTS_KEY) is None:
        store.save(COUNTS_KEY, {m.value: 0 for m in MOODS})
    print(f"✅ Initialized data file: {args.data_path}")


def cmd_where(args: argparse.Namespace) -> None:
    print(args.data_path)
    print(f"↳ using {data_path_reason(args.data_arg, args.profile)}")


def cmd_doctor(args: argparse.Namespace) -> None:
    print("=== Mood Logger Doctor ===")

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)
    print("✅ Data path safety guard: OK")

    store = JsonFileStore(args.data_path)
    keys = store.keys()
    print(f"✅ JSON readable: OK (records: {', '.join(keys) if keys else 'none'})")

    repo = EntryRepository(store)
    if repo.repair_counts():
        print("🔧 Stored mood counts were out of sync; rewrote them from the entries")
    entries = repo.list()
    counts = repo.counts()
    print(f"✅ Entries: {len(entries)}; counts: " + ", ".join(f"{m.value}={n}" for m, n in counts.items()))

    try:
        perms = stat.S_IMODE(args.data_path.stat().st_mode)
        print(f"🔐 File permissions: {oct(perms)} (target 0o600)")
    except FileNotFoundError:
        print("⚠️ Data file missing (run `moodlog init`)")

    print("=== Done ===")


def cmd_summary(args: argparse.Namespace) -> None:
    view = _journal(args).view()

    print("===================")
    print("Mood Logger Summary")
    print("===================\n")

    print("[DATA PATH]")
    print(args.data_path, "\n")

    print(render_text(view, limit=args.limit))


def cmd_gui(args: argparse.Namespace) -> None:
    from .gui import run_gui

    run_gui(args.settings, allow_repo_data_path=args.allow_repo_data_path)


def _add_chart_type(p: argparse.ArgumentParser) -> None:
    p.add_argument("--type", dest="chart_type", choices=list(CHART_TYPES), default=None,
                   help="Chart style (default: $MOODLOGGER_CHART or bar)")


def main(argv=None) -> None:
    p = argparse.ArgumentParser(prog="moodlog", description="Mood Logger: local mood journal")
    p.add_argument("--data", default=None, help="Path to data JSON (overrides env/default)")
    p.add_argument("--profile", default=None, help="Profile name (e.g. dev/test)")
    p.add_argument("--allow-repo-data-path", action="store_true", help="Override safety guard (not recommended)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    sub = p.add_subparsers(dest="cmd", required=True)
    sub.add_parser("init", help="Initialize data store safely").set_defaults(func=cmd_init)
    sub.add_parser("where", help="Show which data file is active and why").set_defaults(func=cmd_where)
    sub.add_parser("doctor", help="Run safety + health checks").set_defaults(func=cmd_doctor)

    summary = sub.add_parser("summary", help="Totals, counts, chart and latest entries")
    summary.add_argument("--limit", type=int, default=5)
    _add_chart_type(summary)
    summary.set_defaults(func=cmd_summary)

    add = sub.add_parser("add", help="Log a mood entry")
    add.add_argument("--mood", required=True, help=f"One of: {', '.join(m.value for m in MOODS)}")
    add.add_argument("--text", required=True, help="What happened / how you feel")
    add.add_argument("--intensity", type=int, default=5, help=f"Intensity {INTENSITY_MIN}–{INTENSITY_MAX} (default 5)")
    add.add_argument("--date", default=None, help="Day of the entry (e.g. 2024-04-08, yesterday); default today")
    add.add_argument("--format", choices=["line", "block"], default="line")
    add.set_defaults(func=cmd_add)

    lst = sub.add_parser("list", help="List mood entries (newest first)")
    lst.add_argument("--limit", type=int, default=50)
    lst.add_argument("--format", choices=["line", "block"], default="line")
    lst.set_defaults(func=cmd_list)

    edit = sub.add_parser("edit", help="Change mood and/or note of an entry (date and intensity are kept)")
    edit.add_argument("index", type=int, help="Entry index as shown by `list`")
    edit.add_argument("--mood", default=None)
    edit.add_argument("--text", default=None)
    edit.set_defaults(func=cmd_edit)

    delete = sub.add_parser("delete", help="Delete one entry (requires --yes)")
    delete.add_argument("index", type=int, help="Entry index as shown by `list`")
    delete.add_argument("--yes", action="store_true", help="Confirm deletion")
    delete.set_defaults(func=cmd_delete)

    reset = sub.add_parser("reset", help="Delete ALL entries and counts (requires --yes)")
    reset.add_argument("--yes", action="store_true", help="Confirm destructive reset")
    reset.set_defaults(func=cmd_reset)

    chart = sub.add_parser("chart", help="Per-mood intensity chart")
    _add_chart_type(chart)
    chart.set_defaults(func=cmd_chart)

    export = sub.add_parser("export", help="Export entries to CSV")
    export.add_argument("--csv", required=True, help="Output CSV path (e.g. ~/moods.csv)")
    export.set_defaults(func=cmd_export)

    sub.add_parser("gui", help="Open the desktop window").set_defaults(func=cmd_gui)

    args = p.parse_args(argv)
    args.data_arg = args.data
    try:
        args.settings = load_settings(args.data, args.profile, args.verbose)
    except ValidationError as e:
        raise SystemExit(f"⚠️ {e}") from e
    args.data_path = args.settings.data_path
    configure_logging(args.settings)

    assert_safe_data_path(args.data_path, args.allow_repo_data_path)

    try:
        args.func(args)
    except ValidationError as e:
        raise SystemExit(f"⚠️ {e}") from e


if __name__ == "__main__":
    main()
