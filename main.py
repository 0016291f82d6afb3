import argparse
import logging
import sys
from typing import List, Optional

from assetmigrate.default_rules import DEFAULT_DESTINATION, DEFAULT_SOURCE_REPO
from assetmigrate.errors import ConfigurationError, FilesystemError
from assetmigrate.models import MigrationReport
from assetmigrate.pipeline import AssetMigrator, MigrationOptions


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Copy images and one audio clip into <destination>/assets, "
                    "then replace spaces in every copied name with underscores."
    )
    ap.add_argument("--source", help=f"Local folder or git URL (default: clone {DEFAULT_SOURCE_REPO})")
    ap.add_argument("--destination", default=DEFAULT_DESTINATION,
                    help=f"Destination project root (default: {DEFAULT_DESTINATION})")
    ap.add_argument("--force-audio", dest="forced_audio", help="Use this audio file, skip the name heuristic")
    ap.add_argument("--no-rename", dest="rename", action="store_false",
                    help="Leave names with spaces untouched")
    ap.add_argument("--dry-run", action="store_true", help="Show what would happen without changing anything")
    ap.add_argument("--rules", dest="rules_path", help="JSON file overriding extensions, folder names and hints")
    ap.add_argument("--keep-clone", action="store_true", help="Keep the temporary clone of a remote source")
    ap.add_argument("--journal", dest="journal_path", help="Write the executed actions to this JSON file (+ .csv)")
    verbosity = ap.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true")
    return ap


def print_summary(report: MigrationReport) -> None:
    title = "--- DRY RUN SUMMARY ---" if report.dry_run else "------ Summary ------"
    print(f"\n{title}")
    for d, count in report.file_counts.items():
        print(f"{str(d):60} {count} file(s)")
    if report.audio_target is not None:
        print(f"Audio: {report.audio_target} ({report.selection.reason.value})")
    else:
        print(f"No audio added. Drop an mp3/wav into {report.layout.audio_dir} or use --force-audio.")
    print(f"Renamed: {len(report.renames)}")
    suffixed = [p for p in report.renames if p.suffix is not None]
    for plan in suffixed[:30]:
        print(f"  {plan.entry.path} -> {plan.target} (suffix {plan.suffix})")
    if report.warnings:
        print("Warnings:")
        for w in report.warnings:
            print(f"  - {w}")
    verb = "planned" if report.dry_run else "performed"
    print(f"\nDone. {len(report.actions)} action(s) {verb}.")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    options = MigrationOptions(
        source=args.source,
        destination=args.destination,
        forced_audio=args.forced_audio,
        rename=args.rename,
        dry_run=args.dry_run,
        rules_path=args.rules_path,
        keep_clone=args.keep_clone,
        journal_path=args.journal_path,
    )
    try:
        report = AssetMigrator(options).run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FilesystemError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print_summary(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
