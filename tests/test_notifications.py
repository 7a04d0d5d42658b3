# tests/test_notifications.py

from __future__ import annotations

import logging

from apps.board import notifications
from apps.board.notifications import TASK_UPDATED_MESSAGE, ChangeNotificationBus

from .fakes import BrokenChannelLayer, RecordingChannelLayer


def test_publish_sends_untyped_signal_to_broadcast_group() -> None:
    layer = RecordingChannelLayer()

    ChangeNotificationBus(channel_layer=layer).publish()

    assert layer.sent == [("tasks", {"type": TASK_UPDATED_MESSAGE})]


def test_publish_uses_configured_group(settings) -> None:
    settings.TASKS_BROADCAST_GROUP = "board-7"
    layer = RecordingChannelLayer()

    ChangeNotificationBus(channel_layer=layer).publish()

    assert layer.sent[0][0] == "board-7"


def test_explicit_group_name_wins() -> None:
    layer = RecordingChannelLayer()

    ChangeNotificationBus(group_name="custom", channel_layer=layer).publish()

    assert layer.sent == [("custom", {"type": "task.updated"})]


def test_each_publish_is_one_message() -> None:
    layer = RecordingChannelLayer()
    bus = ChangeNotificationBus(channel_layer=layer)

    bus.publish()
    bus.publish()

    assert len(layer.sent) == 2


def test_layer_failure_is_logged_not_raised(caplog) -> None:
    bus = ChangeNotificationBus(channel_layer=BrokenChannelLayer())

    with caplog.at_level(logging.ERROR, logger="apps.board.notifications"):
        bus.publish()

    assert "Falha ao notificar" in caplog.text


def test_missing_channel_layer_is_tolerated(monkeypatch, caplog) -> None:
    monkeypatch.setattr(notifications, "get_channel_layer", lambda: None)

    with caplog.at_level(logging.WARNING, logger="apps.board.notifications"):
        ChangeNotificationBus().publish()

    assert "CHANNEL_LAYERS" in caplog.text
