import re  # regular expressions for the Gin access-log line grammar
import logging  # module logger for per-file progress and I/O errors
from collections import Counter  # Counter for the running tallies
from pathlib import Path  # Path for directory globbing
from types import MappingProxyType  # read-only view over the alias table
from typing import Iterable, Iterator, Dict, Optional, List, Mapping  # type hints used in signatures

logger = logging.getLogger(__name__)  # library code only logs, the CLI configures handlers

LOG_FILE_PATTERN = "server_*.log"  # glob for server log files inside the logs directory

ENDPOINT_ALIASES: Mapping[str, str] = MappingProxyType({  # fixed endpoint -> report category table
    "/modes": "Room Mode Changes",
    "/lutron/shades": "Shade Controls",
    "/iptv/channel": "TV Controls",
    "/iptv/remote": "TV Controls",
    "/iptv": "TV Controls",
    "/bacnet/info": "AC Temperature",
    "/cyviz/avinput": "Cyviz TV Controls",
})  # end of alias table

GIN_MARKER = "[GIN]"  # token written by the Gin request logger

# [GIN] 2025/05/19 - 23:24:39 | 200 |    114.1859ms |             ::1 | POST     "/modes"
GIN_POST_PATTERN = re.compile(
    r'\[GIN\]\s+(?P<date>\d{4}/\d{2}/\d{2})\s+-\s+(?P<time>\d{2}:\d{2}:\d{2})\s+'
    r'\|\s+\d+\s+\|\s+(?P<duration>[^|]+)\s+\|\s+(?P<ip>[^|]+)\s+\|\s+POST\s+"(?P<endpoint>[^"]+)"',
    re.ASCII,  # \d and \s match ASCII only
)  # end of regex compilation


class LogDirectoryError(Exception):  # missing logs directory or no log files in it
    pass


class UsageStats:  # running POST totals for one analysis run

    def __init__(self, aliases: Mapping[str, str] = ENDPOINT_ALIASES):
        self.aliases = aliases
        self.total_post_requests = 0
        self.endpoint_counts: Counter = Counter()
        self.daily_usage: Counter = Counter()
        self.hourly_usage: Counter = Counter()
        self.endpoints_by_day: Dict[str, Counter] = {}
        self.files: Dict[str, int] = {}  # POST events found per input file

    def record(self, event: Dict) -> None:
        apply_event(self, event)

    def to_dict(self) -> Dict:
        return {
            "total_post_requests": self.total_post_requests,
            "endpoint_counts": dict(self.endpoint_counts),
            "daily_usage": dict(self.daily_usage),
            "hourly_usage": dict(self.hourly_usage),
            "endpoints_by_day": {day: dict(counts) for day, counts in self.endpoints_by_day.items()},
            "files": dict(self.files),
        }


def resolve_alias(endpoint: str, aliases: Mapping[str, str] = ENDPOINT_ALIASES) -> str:  # map a raw path to its category name
    return aliases.get(endpoint, endpoint)  # exact match only, unknown paths pass through


def parse_line(line: str) -> Optional[Dict]:  # parse one Gin log line, returns an event dict or None
    if GIN_MARKER not in line or "POST" not in line:  # cheap substring check before the regex
        return None  # not a Gin POST line
    m = GIN_POST_PATTERN.search(line)  # attempt the full structured match
    if not m:  # malformed or foreign line
        return None  # skipped without error
    gd = m.groupdict()  # named groups as a dict
    return {  # return the normalized event
        "date": gd["date"],  # e.g. "2025/05/19"
        "time": gd["time"],  # e.g. "23:24:39"
        "duration": gd["duration"].strip(),  # raw duration text, unit kept
        "ip": gd["ip"].strip(),  # client address as logged
        "endpoint": gd["endpoint"],  # raw path, aliased later by the aggregator
    }  # end of returned dict


def apply_event(stats: UsageStats, event: Dict) -> None:  # fold one event into the running tallies
    alias = resolve_alias(event["endpoint"], stats.aliases)  # category name used for every endpoint tally
    date = event["date"]  # day bucket
    hour = event["time"][:2] + ":00"  # hour of day, shared across all dates
    stats.total_post_requests += 1  # overall counter
    stats.endpoint_counts[alias] += 1  # per-endpoint counter
    stats.daily_usage[date] += 1  # per-day counter
    stats.hourly_usage[hour] += 1  # per-hour counter
    stats.endpoints_by_day.setdefault(date, Counter())[alias] += 1  # per-day, per-endpoint counter


def find_log_files(directory, pattern: str = LOG_FILE_PATTERN) -> List[Path]:  # list the log files to scan
    logs_dir = Path(directory)  # accept str or Path
    if not logs_dir.is_dir():  # nothing to analyze without the directory
        raise LogDirectoryError(f"Logs directory '{logs_dir}' does not exist")
    files = sorted(p for p in logs_dir.glob(pattern) if p.is_file())  # name order keeps runs deterministic
    if not files:  # an empty directory is just as fatal
        raise LogDirectoryError(f"No log files found in {logs_dir} directory")
    return files  # sorted list of paths


def parse_file(path) -> Iterator[Dict]:  # iterate over POST events from a file path
    with open(path, "r", encoding="utf-8", errors="replace") as f:  # undecodable bytes never abort the file
        for raw in f:  # read line by line
            event = parse_line(raw)  # event dict or None
            if event:  # only Gin POST lines
                yield event  # hand the event to the caller


def analyze_files(paths: Iterable, stats: Optional[UsageStats] = None) -> UsageStats:  # aggregate every file in order
    if stats is None:  # start a fresh run unless the caller brings one
        stats = UsageStats()
    for path in paths:  # strictly one file after another
        name = str(path)  # key used in the per-file tally
        logger.debug("Processing: %s", name)
        count = 0  # POST events found in this file
        try:
            for event in parse_file(path):  # events read before a failure are kept
                stats.record(event)
                count += 1
        except OSError as exc:  # one bad file must not stop the rest
            logger.error("Error reading file %s: %s", name, exc)
        stats.files[name] = count  # true count, even for a partially read file
        logger.info("%s: found %d POST requests", name, count)
    return stats  # final aggregate


__all__ = [  # public API for "from gin_usage.analyzer import *"
    "ENDPOINT_ALIASES",
    "LogDirectoryError",
    "UsageStats",
    "resolve_alias",
    "parse_line",
    "apply_event",
    "find_log_files",
    "parse_file",
    "analyze_files",
]  # end of __all__
