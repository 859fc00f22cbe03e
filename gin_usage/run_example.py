from .analyzer import find_log_files, analyze_files
from .reports import render_text_report
from pathlib import Path


def main():
    here = Path(__file__).parent
    stats = analyze_files(find_log_files(here / "sample_logs"))
    print(render_text_report(stats), end="")


if __name__ == "__main__":
    main()
