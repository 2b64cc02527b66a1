"""Settings tests — env var loading and validation."""

import pytest
from pydantic import ValidationError

from storefront.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.port == 8080
    assert s.chat_queue_maxsize == 0
    assert s.chat_send_timeout > 0
    assert s.cors_methods == ["GET", "POST", "PUT", "DELETE"]


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("STOREFRONT_PORT", "9000")
    monkeypatch.setenv("STOREFRONT_CHAT_SEND_TIMEOUT", "1.5")
    s = Settings(_env_file=None)
    assert s.port == 9000
    assert s.chat_send_timeout == 1.5


def test_send_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, chat_send_timeout=0)


def test_queue_size_cannot_be_negative():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, chat_queue_maxsize=-1)
