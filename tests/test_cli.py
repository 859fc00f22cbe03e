import json

from gin_usage.cli import main

LINES = [
    '[GIN] 2025/05/19 - 23:24:39 | 200 |    114.1859ms |             ::1 | POST     "/modes"',
    '[GIN] 2025/05/19 - 23:25:02 | 200 |      2.0312ms |             ::1 | GET      "/status"',
    '[GIN] 2025/05/20 - 08:02:45 | 200 |    301.004ms |    192.168.1.20 | POST     "/iptv/channel"',
]


def test_main_writes_both_reports(tmp_path, monkeypatch, capsys):
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "server_2025-05-19_23-24-39.log").write_text("\n".join(LINES) + "\n")
    monkeypatch.chdir(tmp_path)

    assert main([]) == 0

    data = json.loads((tmp_path / "usage_stats.json").read_text())
    assert data["total_post_requests"] == 2
    assert data["endpoint_counts"] == {"Room Mode Changes": 1, "TV Controls": 1}
    text = (tmp_path / "usage_stats.txt").read_text()
    assert "Total POST Requests: 2" in text
    out = capsys.readouterr().out
    assert "Found 1 log files" in out
    assert "Total POST requests found: 2" in out


def test_main_without_logs_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert not (tmp_path / "usage_stats.txt").exists()
    assert not (tmp_path / "usage_stats.json").exists()


def test_main_with_empty_logs_dir(tmp_path, monkeypatch):
    (tmp_path / "logs").mkdir()
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert not (tmp_path / "usage_stats.json").exists()


def test_main_report_write_failure(tmp_path, monkeypatch):
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "server_a.log").write_text(LINES[0] + "\n")
    monkeypatch.chdir(tmp_path)

    code = main(["--text-out", str(tmp_path / "nope" / "usage_stats.txt")])

    assert code == 2
    assert (tmp_path / "usage_stats.json").exists()


def test_run_example(capsys):
    from gin_usage.run_example import main as run_example

    run_example()

    out = capsys.readouterr().out
    assert "Total POST Requests: 6" in out
    assert "TV Controls         :     2 requests (33.3%)" in out
