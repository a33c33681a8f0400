import sys
from datetime import datetime

_log_file: str = ''


def configure(log_file: str = '') -> None:
    """Also append log lines to log_file (empty: stderr only)."""
    global _log_file
    _log_file = log_file


def log(msg: str, level: str = 'INFO'):
    """Write a log line to stderr and, if configured, to the log file."""
    timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    line = f"[{timestamp}] [{level}] {msg}\n"
    sys.stderr.write(line)
    if _log_file:
        with open(_log_file, 'a', encoding='utf-8') as f:
            f.write(line)
