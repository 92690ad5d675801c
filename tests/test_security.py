"""
Tests for bearer-token authentication.
"""

from __future__ import annotations

import logging

import pytest

from mcp_n8n.config import SecurityConfig
from mcp_n8n.errors import UnauthenticatedError
from mcp_n8n.security import (
    UNAUTHORIZED_MESSAGE,
    BearerTokenAuthenticator,
    extract_bearer_token,
)


class TestExtractBearerToken:
    """Tests for extract_bearer_token."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("Bearer  abc  ", "abc"),
            ("Bearer ", ""),
            ("bearer abc", None),
            ("Basic abc", None),
            ("abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, header: str | None, expected: str | None) -> None:
        assert extract_bearer_token(header) == expected


class TestBearerTokenAuthenticator:
    """Tests for BearerTokenAuthenticator."""

    def test_valid_token(self) -> None:
        authenticator = BearerTokenAuthenticator("abc")
        authenticator.authenticate("Bearer abc")

    def test_from_config(self) -> None:
        authenticator = BearerTokenAuthenticator.from_config(
            SecurityConfig(auth_token="  abc  ")
        )
        assert authenticator.configured
        authenticator.authenticate("Bearer abc")

    @pytest.mark.parametrize(
        ("header", "reason"),
        [
            (None, "missing_token"),
            ("Token abc", "not_bearer"),
            ("Bearer abd", "invalid_token"),
            ("Bearer ", "invalid_token"),
        ],
    )
    def test_rejections(
        self, header: str | None, reason: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        authenticator = BearerTokenAuthenticator("abc")

        with caplog.at_level(logging.WARNING, logger="mcp_n8n"):
            with pytest.raises(UnauthenticatedError) as exc_info:
                authenticator.authenticate(header)

        assert exc_info.value.message == UNAUTHORIZED_MESSAGE
        assert [r.reason for r in caplog.records] == [reason]

    def test_unconfigured_rejects_everything(self) -> None:
        authenticator = BearerTokenAuthenticator.from_config(SecurityConfig())

        assert not authenticator.configured
        with pytest.raises(UnauthenticatedError):
            authenticator.authenticate("Bearer anything")
