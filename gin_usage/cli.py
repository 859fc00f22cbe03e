import argparse
import logging

from .analyzer import LOG_FILE_PATTERN, LogDirectoryError, find_log_files, analyze_files
from .reports import TEXT_REPORT, JSON_REPORT, render_text_report, render_json_report, write_report

DEFAULT_LOGS_DIR = "logs"

logger = logging.getLogger(__name__)


def build_parser():
    p = argparse.ArgumentParser(description="Summarize POST requests from Gin server logs")
    p.add_argument("--logs-dir", "-d", default=DEFAULT_LOGS_DIR, help="Directory holding server_*.log files")
    p.add_argument("--pattern", default=LOG_FILE_PATTERN, help="Glob for log files inside the logs directory")
    p.add_argument("--text-out", default=TEXT_REPORT, help="Path of the text report")
    p.add_argument("--json-out", default=JSON_REPORT, help="Path of the JSON report")
    p.add_argument("--verbose", "-v", action="store_true", help="Log every file as it is processed")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        log_files = find_log_files(args.logs_dir, args.pattern)
    except LogDirectoryError as exc:
        logger.error("%s", exc)
        return 1

    print(f"Found {len(log_files)} log files")
    stats = analyze_files(log_files)

    text_ok = write_report(args.text_out, render_text_report(stats))
    json_ok = write_report(args.json_out, render_json_report(stats))

    print()
    print("Analysis complete!")
    print(f"Total POST requests found: {stats.total_post_requests}")
    written = [path for path, ok in ((args.text_out, text_ok), (args.json_out, json_ok)) if ok]
    if written:
        print(f"Reports saved: {' and '.join(written)}")
    return 0 if text_ok and json_ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
