import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from loglens.main import create_app
from loglens.services.log_pipeline import LogEntry, LogLevel


SAMPLE_LOG = (
    "2025-04-17 08:21:24.838 +02:00 [INF] Application starting\n"
    "2025-04-17 08:21:25.000 +02:00 [ERR] Connection refused\n"
    "System.Net.Sockets.SocketException: Connection refused\n"
    "   at Db.Client.Open()\n"
    "   at Worker.Run()\n"
    "2025-04-17 08:30:00.000 +02:00 [WRN] Slow response from cache\n"
    "2025-04-17 08:35:10.120 +02:00 [ERR] Connection refused\n"
    "System.Net.Sockets.SocketException: Connection refused\n"
    "   at Db.Client.Open()\n"
    "   at Worker.Run()\n"
    "2025-04-17 09:10:00.000 +02:00 [ERR] Disk full\n"
)

SECOND_LOG = (
    "2025-04-17 06:40:00.000 +00:00 [ERR] Disk full\n"
    "2025-04-17 06:41:00.000 +00:00 [WRN] Retrying upload\n"
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def make_entry():
    """Build LogEntry objects from a compact "HH:MM" or full datetime spec."""
    def _make(ts, message="Boom", level=LogLevel.ERROR, source_file="app.log"):
        if isinstance(ts, str):
            hours, minutes = ts.split(":")
            ts = utc(2025, 4, 17, int(hours), int(minutes))
        return LogEntry(timestamp=ts, level=level, message=message, source_file=source_file)
    return _make


@pytest.fixture
def sample_log():
    return SAMPLE_LOG


@pytest.fixture
def second_log():
    return SECOND_LOG


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
