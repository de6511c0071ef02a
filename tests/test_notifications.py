# tests/test_notifications.py

"""
Notification Hub Tests - fan-out, de-duplication, capped history and
subscription lifecycle. Redis is not configured, so history stays in memory.
"""

import asyncio

from evalboard.api.endpoints.notifications import format_sse
from evalboard.models.enums import NotificationKind
from evalboard.services.notification import NotificationHub
from tests.helpers import API


class TestNotificationHub:

    def test_publish_reaches_subscriber(self):
        async def scenario():
            hub = NotificationHub(limit=5)
            subscription = hub.subscribe()
            await hub.publish(NotificationKind.TEACHER_ADDED, "New teacher added: A", teacher_id=1)
            event = await asyncio.wait_for(subscription.__anext__(), timeout=1)
            subscription.close()
            return event, hub

        event, hub = asyncio.run(scenario())
        assert event.kind == NotificationKind.TEACHER_ADDED
        assert event.teacher_id == 1
        assert hub.subscriber_count == 0

    def test_duplicate_event_id_dropped(self):
        async def scenario():
            hub = NotificationHub(limit=5)
            first = await hub.publish(NotificationKind.EVALUATION_ADDED, "x", event_id="evaluation-1")
            second = await hub.publish(NotificationKind.EVALUATION_ADDED, "x", event_id="evaluation-1")
            return first, second, await hub.history()

        first, second, history = asyncio.run(scenario())
        assert first is not None
        assert second is None
        assert len(history) == 1

    def test_history_capped_newest_first(self):
        async def scenario():
            hub = NotificationHub(limit=50)
            for i in range(60):
                await hub.publish(NotificationKind.TEACHER_UPDATED, f"update {i}", event_id=f"e{i}")
            return await hub.history()

        history = asyncio.run(scenario())
        assert len(history) == 50
        assert history[0].id == "e59"
        assert history[-1].id == "e10"

    def test_mark_all_read(self):
        async def scenario():
            hub = NotificationHub(limit=5)
            await hub.publish(NotificationKind.TEACHER_ADDED, "a")
            await hub.publish(NotificationKind.TEACHER_ADDED, "b")
            before = await hub.get_notifications()
            changed = await hub.mark_all_read()
            after = await hub.get_notifications()
            return before, changed, after

        before, changed, after = asyncio.run(scenario())
        assert before.unread_count == 2
        assert changed == 2
        assert after.unread_count == 0

    def test_closed_subscription_stops_iteration(self):
        async def scenario():
            hub = NotificationHub(limit=5)
            subscription = hub.subscribe()
            received = []

            async def reader():
                async for event in subscription:
                    received.append(event.id)

            task = asyncio.create_task(reader())
            await hub.publish(NotificationKind.TEACHER_ADDED, "a", event_id="a")
            await asyncio.sleep(0)
            hub.close_all()
            await asyncio.wait_for(task, timeout=1)
            # Published after close: never delivered
            await hub.publish(NotificationKind.TEACHER_ADDED, "b", event_id="b")
            return received, hub.subscriber_count

        received, count = asyncio.run(scenario())
        assert received == ["a"]
        assert count == 0

    def test_slow_reader_keeps_newest(self):
        async def scenario():
            hub = NotificationHub(limit=3)
            subscription = hub.subscribe()
            for i in range(5):
                await hub.publish(NotificationKind.TEACHER_UPDATED, str(i), event_id=str(i))
            subscription.close()
            return [event.id async for event in subscription]

        assert asyncio.run(scenario()) == ["2", "3", "4"]

    def test_sse_frame(self):
        async def scenario():
            hub = NotificationHub(limit=5)
            return await hub.publish(NotificationKind.TEACHER_REMOVED, "gone", event_id="r1")

        frame = format_sse(asyncio.run(scenario()))
        assert frame.startswith("id: r1\nevent: teacher_removed\ndata: {")
        assert frame.endswith("\n\n")


class TestNotificationEndpoints:

    def test_teacher_changes_are_recorded(self, client, supervisor_headers, provision_teacher):
        provision_teacher("Amal Haddad", "amal@school.example")

        response = client.get(f"{API}/notifications", headers=supervisor_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["unread_count"] == 1
        assert data["items"][0]["kind"] == "teacher_added"

        response = client.post(f"{API}/notifications/read-all", headers=supervisor_headers)
        assert response.json()["data"] == {"updated": 1}
        assert client.get(f"{API}/notifications", headers=supervisor_headers).json()["unread_count"] == 0

    def test_requires_supervisor(self, client):
        client.cookies.clear()
        assert client.get(f"{API}/notifications").status_code == 401
