"""
Where: services/couch_facade/tests/test_config_defaults.py
What: Validate FacadeConfig defaults and required settings.
Why: The upstream address must come from the environment, never a built-in default.
"""

import pytest
from pydantic import ValidationError

from services.couch_facade.config import FacadeConfig


def test_couchdb_url_is_required(monkeypatch):
    monkeypatch.delenv("COUCHDB_URL", raising=False)

    with pytest.raises(ValidationError) as exc_info:
        FacadeConfig(_env_file=None)

    assert "COUCHDB_URL" in str(exc_info.value)


def test_couchdb_url_read_from_environment(monkeypatch):
    monkeypatch.setenv("COUCHDB_URL", "http://couch.internal:5984")

    config = FacadeConfig(_env_file=None)

    assert config.COUCHDB_URL == "http://couch.internal:5984"


def test_timeouts_are_bounded_by_default(monkeypatch):
    monkeypatch.setenv("COUCHDB_URL", "http://couch.internal:5984")
    monkeypatch.delenv("UPSTREAM_TIMEOUT", raising=False)
    monkeypatch.delenv("ATTACHMENT_TIMEOUT", raising=False)

    config = FacadeConfig(_env_file=None)

    assert config.UPSTREAM_TIMEOUT == 30.0
    assert config.UPSTREAM_CONNECT_TIMEOUT == 5.0
    assert config.ATTACHMENT_TIMEOUT == 300.0


def test_non_positive_timeout_rejected(monkeypatch):
    monkeypatch.setenv("COUCHDB_URL", "http://couch.internal:5984")
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        FacadeConfig(_env_file=None)
