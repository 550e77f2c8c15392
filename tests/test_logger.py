from __future__ import annotations

import io
import subprocess
import sys
import threading
import textwrap
from datetime import datetime
from pathlib import Path

import pytest
from conftest import ANSI_RE, parse_line, wait_for

import serverlog
from serverlog.config import LoggerConfig
from serverlog.log import Logger

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_concurrent_producers_keep_per_producer_order(tmp_path):
    path = tmp_path / "app.log"
    cfg = LoggerConfig(console_enabled=False, file_enabled=True, file_path=path, queue_capacity=8)
    log = Logger(cfg).start()

    def produce(pid: int) -> None:
        for seq in range(200):
            log.general(f"p{pid}", seq)

    producers = [threading.Thread(target=produce, args=(pid,)) for pid in range(4)]
    for thread in producers:
        thread.start()
    for thread in producers:
        thread.join()
    log.flush()
    log.kill()

    seen = {pid: [] for pid in range(4)}
    for line in path.read_text().splitlines():
        tag, seq = parse_line(line)[2].split()
        seen[int(tag[1:])].append(int(seq))
    assert all(seqs == list(range(200)) for seqs in seen.values())


def test_fatal_is_intercepted_by_exit_hook(tmp_path):
    path = tmp_path / "app.log"
    statuses = []
    log = serverlog.init_file(False, True, path, on_exit=statuses.append)
    log.general("before")
    log.fatalf("cannot bind port %d", 8080)
    log.join(timeout=5)
    serverlog.kill()

    assert statuses == [1]
    lines = path.read_text().splitlines()
    assert parse_line(lines[-1])[1:] == ("FATAL:", "cannot bind port 8080")


def test_fatal_terminates_process_after_persisting(tmp_path):
    path = tmp_path / "app.log"
    code = textwrap.dedent(
        f"""
        import sys, time
        sys.path.insert(0, {str(REPO_ROOT)!r})
        import serverlog
        serverlog.init_file(True, True, {str(path)!r})
        serverlog.general("still fine")
        serverlog.fatal("disk on fire")
        time.sleep(10)
        """
    )
    result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, timeout=60)

    assert result.returncode == 1
    lines = path.read_text().splitlines()
    assert [parse_line(line)[2] for line in lines] == ["still fine", "disk on fire"]
    assert "disk on fire" in ANSI_RE.sub("", result.stdout)


def test_example_scenario_console_and_daily_file(tmp_path, clock):
    stream = io.StringIO()
    log = serverlog.init(True, True, 3, tmp_path, stream=stream, clock=clock)
    serverlog.general("listening on", 8080)
    log.flush()
    serverlog.kill()

    daily = tmp_path / "2024-01-31-serverlog.log"
    assert daily.read_text() == "23:59:00 GENERAL: listening on 8080\n"
    console = stream.getvalue()
    assert ANSI_RE.search(console) is not None
    assert ANSI_RE.sub("", console) == daily.read_text()


def test_startup_uses_long_timestamp(tmp_path, clock):
    path = tmp_path / "app.log"
    log = Logger(LoggerConfig(console_enabled=False, file_enabled=True, file_path=path), clock=clock).start()
    log.startupf("Server listening on port: %d", 8080)
    log.flush()
    log.kill()
    assert path.read_text() == "2024/January/31 23:59:00 STARTUP: Server listening on port: 8080\n"


def test_rotation_at_day_boundary(tmp_path, clock):
    cfg = LoggerConfig(console_enabled=False, file_enabled=True, log_directory=tmp_path, max_retained_days=2)
    log = Logger(cfg, clock=clock).start()
    old = tmp_path / "2024-01-31-serverlog.log"
    new = tmp_path / "2024-02-01-serverlog.log"
    assert log.active_path == old

    log.general("before midnight")
    log.flush()
    clock.advance_to(datetime(2024, 2, 1, 0, 0, 1))
    assert wait_for(lambda: log.active_path == new)
    log.warning("after midnight")
    log.flush()

    assert wait_for(lambda: log.overseer.last_boundary == datetime(2024, 2, 1))
    log.kill()
    log.join(timeout=5)

    assert parse_line(old.read_text())[2] == "before midnight"
    assert parse_line(new.read_text())[1:] == ("WARNING:", "after midnight")
    assert sorted(p.name for p in tmp_path.iterdir()) == [old.name, new.name]


def test_kill_stops_tasks_and_ignores_later_calls(tmp_path):
    cfg = LoggerConfig(console_enabled=False, file_enabled=True, log_directory=tmp_path)
    log = Logger(cfg).start()
    log.kill()
    log.join(timeout=5)
    log.general("after kill")

    assert log.killed
    assert not log.writer.file_enabled
    assert list(tmp_path.iterdir()) == []


def test_module_api_requires_init():
    serverlog.kill()
    with pytest.raises(RuntimeError):
        serverlog.general("nobody listening")


def test_writer_exit_releases_flush_and_producers(tmp_path):
    path = tmp_path / "app.log"
    cfg = LoggerConfig(console_enabled=False, file_enabled=True, file_path=path, queue_capacity=1, poll_interval=0.01)
    statuses = []
    log = Logger(cfg, on_exit=statuses.append).start()
    log.fatal("boom")

    def keep_logging() -> None:
        for n in range(5):
            log.general("after", n)
        log.flush()

    worker = threading.Thread(target=keep_logging, daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert statuses == [1]
    assert "after" not in path.read_text()
