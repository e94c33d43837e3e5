"""
Unit tests for NotificationDebouncer forwarding rules.
"""
from typing import List

from sherlock.application.services.notification_debouncer import (
    NotificationDebouncer,
    build_agent_message,
    is_placeholder_snapshot,
)
from sherlock.application.services.visual_context_bus import VisualContextBus
from sherlock.domain.models.visual_context import VisualContextSnapshot
from sherlock.infrastructure.notifications.voice_agent_channel import VoiceAgentChannel


class RecordingChannel(VoiceAgentChannel):
    def __init__(self, connected: bool = True, accept: bool = True) -> None:
        self.connected = connected
        self.accept = accept
        self.messages: List[str] = []

    def is_connected(self) -> bool:
        return self.connected

    def push(self, message: str) -> bool:
        if not self.connected or not self.accept:
            return False
        self.messages.append(message)
        return True


def _seen(identity_id: str, at: float, name: str = "Ada Lovelace", status: str = "Friend"):
    return VisualContextSnapshot(found=True, id=identity_id, name=name, relationship_status=status, last_seen=at)


class TestForwardingRules:
    def test_same_identity_within_interval_forwards_once(self):
        channel = RecordingChannel()
        debouncer = NotificationDebouncer(channel, interval_seconds=30)

        debouncer.on_snapshot(_seen("A", 0))
        debouncer.on_snapshot(_seen("A", 10))

        assert len(channel.messages) == 1

    def test_same_identity_after_interval_forwards_again(self):
        channel = RecordingChannel()
        debouncer = NotificationDebouncer(channel, interval_seconds=30)

        debouncer.on_snapshot(_seen("A", 0))
        debouncer.on_snapshot(_seen("A", 31))

        assert len(channel.messages) == 2

    def test_exactly_interval_forwards(self):
        channel = RecordingChannel()
        debouncer = NotificationDebouncer(channel, interval_seconds=30)

        debouncer.on_snapshot(_seen("A", 0))
        assert debouncer.on_snapshot(_seen("A", 30)) is True

    def test_identity_change_forwards_immediately(self):
        channel = RecordingChannel()
        debouncer = NotificationDebouncer(channel, interval_seconds=30)

        debouncer.on_snapshot(_seen("A", 0))
        debouncer.on_snapshot(_seen("B", 1))

        assert len(channel.messages) == 2
        assert debouncer.last_forward == ("B", 1)

    def test_not_found_ignored(self):
        channel = RecordingChannel()
        debouncer = NotificationDebouncer(channel)

        assert debouncer.on_snapshot(VisualContextSnapshot(found=False, last_seen=0)) is False
        assert channel.messages == []

    def test_disconnected_agent_does_not_record_forward(self):
        channel = RecordingChannel(connected=False)
        debouncer = NotificationDebouncer(channel, interval_seconds=30)

        debouncer.on_snapshot(_seen("A", 0))
        assert debouncer.last_forward is None

        channel.connected = True
        debouncer.on_snapshot(_seen("A", 5))
        assert len(channel.messages) == 1

    def test_clock_used_when_snapshot_has_no_time(self):
        channel = RecordingChannel()
        times = iter([0.0, 10.0, 40.0])
        debouncer = NotificationDebouncer(channel, interval_seconds=30, clock=lambda: next(times))
        snapshot = VisualContextSnapshot(found=True, id="A", name="Ada")

        debouncer.on_snapshot(snapshot)
        debouncer.on_snapshot(snapshot)
        debouncer.on_snapshot(snapshot)

        assert len(channel.messages) == 2


class TestAttach:
    def test_attach_and_detach(self):
        channel = RecordingChannel()
        bus = VisualContextBus()
        debouncer = NotificationDebouncer(channel)

        debouncer.attach(bus)
        bus.update(_seen("A", 0))
        debouncer.detach()
        bus.update(_seen("B", 1))

        assert len(channel.messages) == 1
        assert bus.subscriber_count() == 0


class TestMessages:
    def test_placeholder_message(self):
        message = build_agent_message(_seen("id-9", 0, name="New Contact 2025-01-01 10:00:00", status="New"))
        assert message.startswith("System Update: A new face has been detected.")
        assert "Identity ID: id-9." in message
        assert '"New Contact 2025-01-01 10:00:00"' in message
        assert "update_identity" in message
        assert "Do NOT ask the user questions." in message

    def test_known_contact_message(self):
        message = build_agent_message(_seen("id-3", 0))
        assert message.startswith("System Update: The user is looking at Ada Lovelace.")
        assert "Relationship: Friend." in message
        assert "Identity ID: id-3." in message

    def test_known_contact_without_status(self):
        snapshot = VisualContextSnapshot(found=True, id="id-3", name="Ada", last_seen=0)
        assert "Relationship: Unknown." in build_agent_message(snapshot)


class TestPlaceholderRule:
    def test_placeholder_name_alone(self):
        assert is_placeholder_snapshot(_seen("id-1", 0, name="New Contact 2025-01-01 10:00:00", status="Friend"))

    def test_new_status_alone(self):
        assert is_placeholder_snapshot(_seen("id-1", 0, name="Ada", status="New"))

    def test_named_contact(self):
        assert not is_placeholder_snapshot(_seen("id-1", 0, name="Ada", status="Friend"))
        assert not is_placeholder_snapshot(VisualContextSnapshot(found=True, id="id-1", last_seen=0))
