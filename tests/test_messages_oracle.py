from decimal import Decimal

from terrakit.core_types import Coin
from terrakit.messages.oracle import (
    MsgAggregateExchangeRatePreVote,
    MsgAggregateExchangeRateVote,
    MsgDelegateFeedConsent,
    generate_hash,
)

RATES = (
    "22.540203133218404887uaud,21.645596278923282692ucad,15.966787551658593971uchf,"
    "113.167767068332957759ucny,14.449845494375560683ueur,12.582839885411827405ugbp,"
    "135.474594500430895984uhkd,1300.213822842493250029uinr,1900.8256376511075722ujpy,"
    "20351.150811544637337767ukrw,49749.106615326838874584umnt,12.154984433357638529usdr,"
    "23.143090361112943758usgd,0.0uthb,17.444833658754882816uusd"
)
SALT = "df59"
FEEDER = "terra1824vxwh43h9d3qczj4jvc3qphlf2evfp9w0ph9"
VALIDATOR = "terravaloper1usws7c2c6cs7nuc8vma9qzaky5pkgvm2ujy8ny"
HASH = "36681b69da96623a6ae12c2a51448b7426fdd64e"


def test_agg():
    exchange_rates = Coin.parse_coins(RATES)
    coins = ",".join(str(coin) for coin in exchange_rates)
    assert coins == RATES
    assert generate_hash(SALT, RATES, VALIDATOR) == HASH
    vote = MsgAggregateExchangeRateVote.create_internal(SALT, exchange_rates, FEEDER, VALIDATOR)
    assert vote.generate_hash(SALT) == HASH


def test_hash():
    assert generate_hash(SALT, RATES, VALIDATOR) == HASH
    rates2 = (
        "22.548222362821767308uaud,21.653297230216244188ucad,15.972468127589880034uchf,"
        "113.208029274598674692ucny,14.454986380997906048ueur,12.58731653903855345ugbp,"
        "135.522792907175522923uhkd,1300.676405771192471765uinr,1901.501902950678788445ujpy,"
        "20358.286256112132944846ukrw,49766.806079087327983387umnt,12.159308866922868479usdr,"
        "23.151324082621141584usgd,0.0uthb,17.451040085807700841uusd"
    )
    assert generate_hash("6dd4", rates2, VALIDATOR) == "54a849b1b3b510f5f0b7c5405ed2cc74cd283251"


def test_create_internal_sorts_rates():
    coins = [Coin.create("uusd", Decimal("2.5")), Coin.create("uaud", Decimal("1.5"))]
    vote = MsgAggregateExchangeRateVote.create_internal(SALT, coins, FEEDER, VALIDATOR)
    assert vote.exchange_rates == "1.5uaud,2.5uusd"
    assert vote.salt == SALT
    assert vote.feeder == FEEDER


def test_gen_pre_vote():
    vote = MsgAggregateExchangeRateVote.create_internal(
        SALT, Coin.parse_coins(RATES), FEEDER, VALIDATOR
    )
    pre_vote = vote.gen_pre_vote(SALT)
    assert pre_vote.msg_type == "oracle/MsgAggregateExchangeRatePrevote"
    assert pre_vote.value == {"feeder": FEEDER, "hash": HASH, "validator": VALIDATOR}


def test_vote_message():
    message = MsgAggregateExchangeRateVote.create(
        SALT, Coin.parse_coins(RATES), FEEDER, VALIDATOR
    )
    assert message.msg_type == "oracle/MsgAggregateExchangeRateVote"
    assert message.value["exchange_rates"] == RATES
    assert list(message.value) == ["exchange_rates", "feeder", "salt", "validator"]


def test_create_from_internal_matches_create():
    internal = MsgAggregateExchangeRateVote.create_internal(
        SALT, Coin.parse_coins(RATES), FEEDER, VALIDATOR
    )
    direct = MsgAggregateExchangeRateVote.create(SALT, Coin.parse_coins(RATES), FEEDER, VALIDATOR)
    assert MsgAggregateExchangeRateVote.create_from_internal(internal).to_dict() == direct.to_dict()


def test_pre_vote_create():
    message = MsgAggregateExchangeRatePreVote.create(HASH, FEEDER, VALIDATOR)
    assert message.to_dict() == {
        "type": "oracle/MsgAggregateExchangeRatePrevote",
        "value": {"feeder": FEEDER, "hash": HASH, "validator": VALIDATOR},
    }


def test_delegate_feed_consent():
    message = MsgDelegateFeedConsent.create(VALIDATOR, FEEDER)
    assert message.msg_type == "oracle/MsgDelegateFeedConsent"
    assert message.value == {"delegate": FEEDER, "operator": VALIDATOR}