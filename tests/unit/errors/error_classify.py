"""Unit tests for exception-to-label classification."""

from __future__ import annotations

from browser_proxy.errors import (
    RelayTransportError,
    UnknownChannelTypeError,
    AuthenticationFailedError,
    BackendLaunchFailedError,
    BackendTerminationFailedError,
    classify_error,
)


def test_classify_error_known_categories() -> None:
    assert classify_error(AuthenticationFailedError("invalid")) == "auth"
    assert classify_error(UnknownChannelTypeError("opera")) == "unknown_channel"
    assert classify_error(BackendLaunchFailedError("webkit", "boom")) == "launch_failed"
    assert classify_error(BackendTerminationFailedError("webkit", "abc", "boom")) == "terminate_failed"
    assert classify_error(RelayTransportError("reset")) == "relay"
    assert classify_error(TimeoutError("deadline exceeded")) == "timeout"
    assert classify_error(ConnectionError("socket closed")) == "connection"


def test_classify_error_defaults_to_unknown() -> None:
    assert classify_error(RuntimeError("boom")) == "unknown"


def test_error_messages_carry_context() -> None:
    assert str(AuthenticationFailedError("missing")) == "authentication failed: missing token"
    assert "opera" in str(UnknownChannelTypeError("opera"))
    launch = BackendLaunchFailedError("firefox", "no binary")
    assert launch.channel == "firefox"
    assert str(launch) == "failed to launch firefox backend: no binary"
