"""Tests for the application entry point module"""
import importlib

from neuroquest import config
from neuroquest.models.quest import Quest


def test_lowercase_log_level(monkeypatch):
    """Test the entry point accepts a lowercase LOG_LEVEL"""
    monkeypatch.setattr(config, "LOG_LEVEL", "debug")

    import neuroquest.main
    importlib.reload(neuroquest.main)

    assert neuroquest.main.DEMO_USER_ID == "demo-user"


def test_demo_quests_are_valid():
    """Test the demo catalog parses into quests owned by the demo user"""
    from neuroquest.main import DEMO_QUESTS, DEMO_USER_ID

    quests = [Quest.from_dict(definition) for definition in DEMO_QUESTS]

    assert {q.user_id for q in quests} == {DEMO_USER_ID}
    assert all(not q.completed for q in quests)
