"""Tests for WIDs and message keys."""

import pytest

from wa_actions.errors import InvalidMsgKeyError, InvalidWidError
from wa_actions.models.msg_key import MsgKey
from wa_actions.models.wid import Wid, assert_wid


class TestWid:
    def test_parse_user(self):
        wid = Wid.parse("5511999999999@c.us")
        assert wid.user == "5511999999999"
        assert wid.server == "c.us"
        assert wid.is_user()
        assert not wid.is_group()

    def test_legacy_server_is_normalised(self):
        assert Wid.parse("5511999999999@s.whatsapp.net") == Wid.parse("5511999999999@c.us")

    def test_legacy_string_form(self):
        wid = Wid.parse("5511999999999@c.us")
        assert wid.to_string() == "5511999999999@c.us"
        assert wid.to_string(legacy=True) == "5511999999999@s.whatsapp.net"
        # Only c.us has a legacy spelling
        assert Wid.parse("123@g.us").to_string(legacy=True) == "123@g.us"

    def test_string_round_trip(self):
        for raw in ("5511999999999@c.us", "120363000000000001@g.us", "status@broadcast", "abc@call", "99@lid"):
            assert str(Wid.parse(raw)) == raw

    def test_predicates(self):
        assert Wid.parse("120363@g.us").is_group()
        assert Wid.parse("13135550002@bot").is_bot()
        assert Wid.parse("AbCd@call").is_group_call()
        assert Wid.parse("status@broadcast").is_status()
        assert Wid.parse("99@lid").is_user()
        assert not Wid.parse("120363@g.us").is_user()

    def test_hashable_and_equal_by_value(self):
        a = Wid.parse("1@c.us")
        b = Wid(user="1", server="c.us")
        assert a == b
        assert len({a, b}) == 1

    @pytest.mark.parametrize("raw", ["", "nobody", "@c.us", "123@", "a@b@c"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidWidError) as exc:
            Wid.parse(raw)
        assert exc.value.code == "invalid_wid"

    def test_assert_wid(self):
        wid = Wid.parse("1@c.us")
        assert assert_wid(wid) is wid
        assert assert_wid("1@c.us") == wid
        with pytest.raises(InvalidWidError):
            assert_wid(12345)  # type: ignore[arg-type]


class TestMsgKey:
    def test_from_string(self):
        key = MsgKey.from_string("true_5511999999999@c.us_3EB0ABCDEF")
        assert key.from_me is True
        assert key.remote == Wid.parse("5511999999999@c.us")
        assert key.id == "3EB0ABCDEF"
        assert key.participant is None

    def test_with_participant(self):
        raw = "false_120363@g.us_ABC_5511911111111@c.us"
        key = MsgKey.from_string(raw)
        assert key.from_me is False
        assert key.participant == Wid.parse("5511911111111@c.us")
        assert key.to_string() == raw

    def test_string_round_trip(self):
        raw = "true_5511999999999@c.us_3EB0ABCDEF"
        assert str(MsgKey.from_string(raw)) == raw

    @pytest.mark.parametrize("raw", ["", "yes_1@c.us_ABC", "true_1@c.us", "true_bad_ABC", "true_1@c.us__"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidMsgKeyError) as exc:
            MsgKey.from_string(raw)
        assert exc.value.code == "invalid_msg_key"

    def test_new_id_shape(self):
        first, second = MsgKey.new_id(), MsgKey.new_id()
        assert first.startswith("3EB0")
        assert len(first) == 22
        assert first == first.upper()
        assert first != second
