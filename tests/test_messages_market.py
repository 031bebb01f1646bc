from decimal import Decimal

from terrakit.core_types import Coin
from terrakit.messages.market import MsgSwap

TRADER = "terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm"


def test_create_message():
    offer = Coin.create("ukrw", Decimal("1000"))
    msg = MsgSwap.create(offer, "uluna", TRADER)
    assert msg.msg_type == "market/MsgSwap"
    assert msg.value["ask_denom"] == "uluna"
    assert msg.value["trader"] == TRADER
    assert Coin.from_dict(msg.value["offer_coin"]) == offer


def test_value_keys_sorted():
    msg = MsgSwap.create(Coin.create("ukrw", 1), "uusd", TRADER)
    assert list(msg.value) == ["ask_denom", "offer_coin", "trader"]
    assert list(msg.value["offer_coin"]) == ["amount", "denom"]


def test_to_dict_matches_message_value():
    offer = Coin.parse("12.5uusd")
    internal = MsgSwap("uluna", offer, TRADER)
    assert MsgSwap.create(offer, "uluna", TRADER).value == internal.to_dict()