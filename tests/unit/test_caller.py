"""
Unit Tests for Caller Identity
==============================
"""

import pytest
import structlog
from fastapi import HTTPException

from quality_range.api.caller import get_caller, is_trusted_token, token_digest


@pytest.fixture(autouse=True)
def clean_log_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestCaller:
    @pytest.mark.asyncio
    async def test_caller_bound_into_log_context(self):
        caller = await get_caller("demo", user_id=" alice ", token=None)

        assert caller.user_id == "alice"
        assert caller.project_id == "demo"
        assert not caller.token_verified
        context = structlog.contextvars.get_contextvars()
        assert context["user_id"] == "alice"
        assert context["project_id"] == "demo"

    @pytest.mark.asyncio
    async def test_rejected_caller_not_bound(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_caller("demo", user_id=None, token=None)

        assert exc_info.value.status_code == 401
        assert "user_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_trusted_token_marks_caller_verified(self, monkeypatch, test_settings):
        monkeypatch.setattr(test_settings, "skip_token_validation", False)
        monkeypatch.setattr(test_settings, "service_token_digests", [token_digest("secret")])

        caller = await get_caller("demo", user_id="alice", token="secret")

        assert caller.token_verified

    def test_token_trust(self, monkeypatch, test_settings):
        monkeypatch.setattr(test_settings, "service_token_digests", [token_digest("secret")])

        assert is_trusted_token("secret")
        assert not is_trusted_token("Secret")
        assert not is_trusted_token(None)
        assert not is_trusted_token("")
