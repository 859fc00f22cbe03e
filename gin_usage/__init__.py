from .analyzer import (
    ENDPOINT_ALIASES,
    LogDirectoryError,
    UsageStats,
    resolve_alias,
    parse_line,
    apply_event,
    find_log_files,
    parse_file,
    analyze_files,
)
from .reports import render_text_report, render_json_report, write_report

__version__ = "0.1.0"
