from clicker_engine import STOPPED_UNEXPECTEDLY
from logger import StatusLogger


def test_status_levels() -> None:
    log = StatusLogger()
    log.update_status("Auto-clicker started")
    log.update_status(f"{STOPPED_UNEXPECTEDLY}: click denied")
    levels = [entry.level for entry in log.get_recent_logs(100)]
    assert levels == ["INFO", "ERROR"]
    assert log.get_current_status().startswith(STOPPED_UNEXPECTEDLY)


def test_history_is_bounded_and_listener_sees_everything() -> None:
    seen = []
    log = StatusLogger(max_entries=3, listener=seen.append)
    for i in range(5):
        log.log_info(f"Clicks executed: {i}")
    assert [e.message for e in log.get_recent_logs(100)] == [f"Clicks executed: {i}" for i in (2, 3, 4)]
    assert len(seen) == 5
    assert len(log.get_recent_logs(2)) == 2


def test_export(tmp_path) -> None:
    log = StatusLogger()
    log.log_warning("Your system may lag!")
    target = tmp_path / "session.log"
    assert log.export_logs_to_file(str(target)) is True
    assert "WARNING: Your system may lag!" in target.read_text(encoding="utf-8")
