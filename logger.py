"""
Status Logger - keeps the status history of clicker sessions.

SRP: This class has one responsibility - recording and exposing status.
The engine reports plain messages; this class decides their level.
"""

from datetime import datetime
from typing import Callable, List, Optional
from dataclasses import dataclass

from clicker_engine import STOPPED_UNEXPECTEDLY


@dataclass
class LogEntry:
    """A single status message."""
    timestamp: datetime
    message: str
    level: str = "INFO"

    def __str__(self) -> str:
        time_str = self.timestamp.strftime("%H:%M:%S")
        return f"[{time_str}] {self.level}: {self.message}"


class StatusLogger:
    """
    Bounded, in-memory status history with an optional live listener.

    Clean Code principles:
    - Small, focused methods
    - Clear naming
    """

    def __init__(self, max_entries: int = 100, listener: Optional[Callable[[LogEntry], None]] = None):
        """
        Initialize the logger.

        Args:
            max_entries: Maximum number of log entries to keep in memory
            listener: Called with every new entry, e.g. to echo it to a console
        """
        self._log_entries: List[LogEntry] = []
        self._max_entries = max_entries
        self._current_status = "Ready"
        self._listener = listener

    def log_info(self, message: str) -> None:
        self._add_entry(message, "INFO")

    def log_warning(self, message: str) -> None:
        self._add_entry(message, "WARNING")

    def log_error(self, message: str) -> None:
        self._add_entry(message, "ERROR")

    def update_status(self, status: str) -> None:
        """
        Update the current status from an engine message.

        Unexpected stops and failed releases are recorded as errors.
        """
        self._current_status = status
        if status.startswith(STOPPED_UNEXPECTEDLY) or status.startswith("Failed"):
            self.log_error(status)
        else:
            self.log_info(status)

    def get_current_status(self) -> str:
        """Returns the current status message."""
        return self._current_status

    def get_recent_logs(self, count: int = 10) -> List[LogEntry]:
        return self._log_entries[-count:]

    def _add_entry(self, message: str, level: str) -> None:
        """
        Add a new log entry.

        DRY: Centralized logic for adding entries.
        """
        entry = LogEntry(
            timestamp=datetime.now(),
            message=message,
            level=level
        )

        self._log_entries.append(entry)

        # Trim old entries if we exceed max
        if len(self._log_entries) > self._max_entries:
            self._log_entries = self._log_entries[-self._max_entries:]

        if self._listener:
            self._listener(entry)

    def export_logs_to_file(self, filepath: str) -> bool:
        """
        Export all logs to a text file.

        Returns:
            bool: True if export was successful
        """
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Click Automation - Session Log\n")
                f.write(f"Generated: {datetime.now()}\n")
                f.write("=" * 50 + "\n\n")

                for entry in self._log_entries:
                    time_str = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")
                    f.write(f"[{time_str}] {entry.level}: {entry.message}\n")

            return True
        except OSError as e:
            print(f"Failed to export logs: {e}")
            return False
