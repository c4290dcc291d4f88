"""Basic unit tests for the wa-actions package."""

from wa_actions import (
    AsyncWAClient,
    WAClient,
    ActionComposer,
    WAActionError,
    CallNotFoundError,
    CallNotOutgoingError,
    InvalidMentionListError,
    MentionedNotUserError,
    NotFromMeError,
    RemoteMismatchError,
    InvalidQuotedMsgError,
    QuotedCannotReplyError,
    PersonaNotFoundError,
    TransportError,
    ConnectionError,
    CallState,
    MessageType,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert AsyncWAClient is not None
    assert WAClient is not None
    assert ActionComposer is not None


def test_error_hierarchy():
    for cls in (
        CallNotFoundError, CallNotOutgoingError, InvalidMentionListError, MentionedNotUserError,
        NotFromMeError, RemoteMismatchError, InvalidQuotedMsgError, QuotedCannotReplyError,
        PersonaNotFoundError, TransportError, ConnectionError,
    ):
        assert issubclass(cls, WAActionError)


def test_error_attributes():
    err = WAActionError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    not_found = CallNotFoundError(None)
    assert not_found.code == "call_not_found"
    assert str(not_found) == "Call <empty> not found"
    assert not_found.details == {"call_id": None}

    not_outgoing = CallNotOutgoingError("c1", "INCOMING_RING")
    assert not_outgoing.code == "call_is_not_outcoming_calling"
    assert not_outgoing.details == {"call_id": "c1", "state": "INCOMING_RING"}

    transport = TransportError("rejected", code="406", details={"id": "x"})
    assert transport.code == "406"


def test_error_codes_are_distinct():
    codes = {
        InvalidMentionListError([]).code,
        MentionedNotUserError("x").code,
        NotFromMeError("k").code,
        RemoteMismatchError("k", "c").code,
        InvalidQuotedMsgError(None).code,
        QuotedCannotReplyError("k").code,
        PersonaNotFoundError("c").code,
        CallNotFoundError(None).code,
        CallNotOutgoingError(None, "NONE").code,
    }
    assert len(codes) == 9


def test_enum_constants():
    assert MessageType.CHAT == "chat"
    assert MessageType.PTT == "ptt"
    assert CallState.OUTGOING_RING == "OUTGOING_RING"
