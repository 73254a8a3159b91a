"""
Smoke test for the lifecycle demo.
"""

from shared.models import EventKind
from syndication.demo import run_lifecycle_demo


def test_lifecycle_demo_delivers_one_notification_per_hook(capsys):
    sink = run_lifecycle_demo()

    notifications = sink.notifications
    assert [n.event_kind for n in notifications] == [
        EventKind.NEW,
        EventKind.UPDATE,
        EventKind.NEW,
        EventKind.NEW,
        EventKind.DELETE,
    ]
    assert notifications[0].status.message == "hello,9"
    assert notifications[1].log_time == "2026-10-18 14:02:11"
    assert notifications[3].status.ok is False
    assert notifications[3].status.message == "Remote site returned 500"
    assert "Notifications delivered to the sink" in capsys.readouterr().out
