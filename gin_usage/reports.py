import json  # json for the structured report
import logging  # module logger for report write failures
import datetime  # datetime for the report generation stamp
from typing import Dict, List, Optional, Tuple  # type hints used in signatures

from .analyzer import UsageStats  # aggregate rendered by both reports

logger = logging.getLogger(__name__)  # library code only logs, the CLI configures handlers

TEXT_REPORT = "usage_stats.txt"  # default text report path
JSON_REPORT = "usage_stats.json"  # default structured report path


def sorted_by_count(counts: Dict[str, int]) -> List[Tuple[str, int]]:  # rank (name, count) pairs, highest first
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)  # stable, ties keep first-seen order


def percentage(count: int, total: int) -> float:  # share of the total as a percentage
    if total == 0:  # no requests at all
        return 0.0  # avoid dividing by zero
    return count / total * 100  # plain ratio scaled to 100


def _heading(title: str, underline: str = "-") -> List[str]:  # section title plus its underline
    return [title, underline * len(title)]  # underline matches the title width


def render_text_report(stats: UsageStats, generated_at: Optional[datetime.datetime] = None) -> str:  # human-readable report
    if generated_at is None:  # callers may pin the stamp
        generated_at = datetime.datetime.now()
    lines = _heading("SERVER USAGE STATISTICS REPORT", "=")  # report banner
    lines.append("")
    lines.append(f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}")
    lines.append("")

    lines += _heading("OVERVIEW")
    lines.append(f"Total POST Requests: {stats.total_post_requests}")
    lines.append("")

    lines += _heading("ENDPOINT USAGE")
    for endpoint, count in sorted_by_count(stats.endpoint_counts):  # busiest endpoints first
        pct = percentage(count, stats.total_post_requests)
        lines.append(f"{endpoint:<20}: {count:5d} requests ({pct:.1f}%)")

    dates = sorted(stats.daily_usage)  # YYYY/MM/DD sorts chronologically as text
    lines.append("")
    lines += _heading("DAILY USAGE")
    for date in dates:
        lines.append(f"{date}: {stats.daily_usage[date]} requests")

    lines.append("")
    lines += _heading("HOURLY USAGE (AGGREGATED)")
    for hour in sorted(stats.hourly_usage):  # HH:00 sorts chronologically as text
        lines.append(f"{hour}: {stats.hourly_usage[hour]} requests")

    lines.append("")
    lines += _heading("DETAILED DAILY BREAKDOWN")
    for date in dates:  # same order as the daily section
        day_counts = stats.endpoints_by_day.get(date)
        if not day_counts:
            continue
        lines.append("")
        lines.append(f"{date}:")
        for endpoint, count in sorted_by_count(day_counts):
            lines.append(f"  {endpoint:<18}: {count} requests")

    return "\n".join(lines) + "\n"  # newline-terminated text


def render_json_report(stats: UsageStats) -> str:  # full aggregate as indented JSON
    return json.dumps(stats.to_dict(), indent=2, sort_keys=True) + "\n"  # sorted keys keep reruns byte-identical


def write_report(path, content: str) -> bool:  # write one report, replacing any previous copy
    try:
        with open(path, "w", encoding="utf-8") as f:  # overwrite, no append
            f.write(content)
    except OSError as exc:  # a failed report must not stop the other one
        logger.error("Error writing report %s: %s", path, exc)
        return False  # caller decides the exit code
    logger.debug("Wrote %s", path)
    return True  # report written


__all__ = [  # public API for "from gin_usage.reports import *"
    "TEXT_REPORT",
    "JSON_REPORT",
    "sorted_by_count",
    "percentage",
    "render_text_report",
    "render_json_report",
    "write_report",
]  # end of __all__
