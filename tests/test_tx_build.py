import dataclasses

import pytest

from mmn_sdk.address import encode_base58
from mmn_sdk.errors import ExtraInfoEncodingError, InvalidAddress, InvalidAmount, ValidationError
from mmn_sdk.tx.build import build_transfer_tx, deserialize_extra_info, serialize_extra_info
from mmn_sdk.types.core import Tx, TxType


def test_build_success_and_fields(alice, bob):
    tx = build_transfer_tx(
        TxType.TRANSFER_BY_ZK, alice, bob, "100", 3,
        timestamp=1_700_000_000, text_data="memo", extra_info={"type": "x"},
        zk_proof="p", zk_pub="q",
    )
    assert isinstance(tx, Tx)
    assert tx.type is TxType.TRANSFER_BY_ZK
    assert tx.amount == 100
    assert tx.nonce == 3
    assert tx.timestamp == 1_700_000_000
    assert tx.extra_info == '{"type":"x"}'
    assert (tx.zk_proof, tx.zk_pub) == ("p", "q")


def test_amount_beyond_u64_is_kept_exactly(alice, bob):
    big = 2**64 + 12345
    tx = build_transfer_tx(TxType.FAUCET, alice, bob, str(big), 1, timestamp=1)
    assert tx.amount == big


def test_default_timestamp_is_seconds(alice, bob, monkeypatch):
    monkeypatch.setattr("mmn_sdk.tx.build.time.time", lambda: 1_700_000_123.9)
    tx = build_transfer_tx(TxType.FAUCET, alice, bob, 1, 0)
    assert tx.timestamp == 1_700_000_123


def test_tx_is_immutable(alice, bob):
    tx = build_transfer_tx(TxType.FAUCET, alice, bob, 1, 0, timestamp=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tx.amount = 2  # type: ignore[misc]
    changed = dataclasses.replace(tx, amount=2)
    assert changed is not tx and tx.amount == 1


def test_validation_order_sender_first(bob):
    # everything is wrong; the sender is reported first
    with pytest.raises(InvalidAddress) as ei:
        build_transfer_tx(TxType.FAUCET, "bad!", "also-bad!", 0, -1, extra_info={1: 2})
    assert ei.value.field == "sender"


def test_validation_recipient(alice):
    with pytest.raises(InvalidAddress) as ei:
        build_transfer_tx(TxType.FAUCET, alice, encode_base58(bytes(31)), 0, 0)
    assert ei.value.field == "recipient"


def test_sender_equals_recipient_rejected(alice):
    with pytest.raises(InvalidAddress) as ei:
        build_transfer_tx(TxType.FAUCET, alice, alice, 1, 0)
    assert ei.value.field == "recipient"


@pytest.mark.parametrize("amount", [0, "0", -1, "", "abc", True])
def test_amount_must_be_positive(alice, bob, amount):
    with pytest.raises(InvalidAmount):
        build_transfer_tx(TxType.FAUCET, alice, bob, amount, 0, extra_info={1: 2})


@pytest.mark.parametrize("extra", [{1: "a"}, {"a": 1}, {"a": None}, ["a"], "not json", "[1,2]"])
def test_extra_info_encoding_errors(alice, bob, extra):
    with pytest.raises(ExtraInfoEncodingError) as ei:
        build_transfer_tx(TxType.FAUCET, alice, bob, 1, 0, extra_info=extra)
    assert ei.value.field == "extra_info"


def test_extra_info_prebuilt_text_kept_verbatim(alice, bob):
    text = '{ "b": "1",  "a": "2" }'
    tx = build_transfer_tx(TxType.FAUCET, alice, bob, 1, 0, extra_info=text)
    assert tx.extra_info == text


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"nonce": -1}, "nonce"),
        ({"nonce": 2**64}, "nonce"),
        ({"nonce": "1"}, "nonce"),
        ({"timestamp": -5}, "timestamp"),
        ({"text_data": 5}, "text_data"),
        ({"zk_proof": None}, "zk_proof"),
        ({"tx_type": 9}, "type"),
    ],
)
def test_remaining_field_validation(alice, bob, kwargs, field):
    args = {"tx_type": TxType.FAUCET, "sender": alice, "recipient": bob, "amount": 1, "nonce": 0}
    args.update(kwargs)
    with pytest.raises(ValidationError) as ei:
        build_transfer_tx(**args)
    assert ei.value.field == field


@pytest.mark.parametrize("field", ["text_data", "zk_proof", "zk_pub"])
def test_lone_surrogate_rejected_before_signing(alice, bob, field):
    with pytest.raises(ValidationError) as ei:
        build_transfer_tx(TxType.TRANSFER_BY_ZK, alice, bob, 1, 0, **{field: "memo \ud800"})
    assert ei.value.field == field


@pytest.mark.parametrize("extra", [{"note": "\udfff"}, '{"note": "\ud800"}'])
def test_extra_info_lone_surrogate_rejected(alice, bob, extra):
    with pytest.raises(ExtraInfoEncodingError) as ei:
        build_transfer_tx(TxType.FAUCET, alice, bob, 1, 0, extra_info=extra)
    assert ei.value.field == "extra_info"


def test_int_tags_map_to_types(alice, bob):
    assert build_transfer_tx(0, alice, bob, 1, 0).type is TxType.TRANSFER_BY_ZK
    assert build_transfer_tx(1, alice, bob, 1, 0).type is TxType.TRANSFER_BY_KEY
    assert build_transfer_tx(2, alice, bob, 1, 0).type is TxType.USER_CONTENT
    assert TxType.FAUCET is TxType.TRANSFER_BY_KEY


def test_serialize_extra_info_keeps_order_and_unicode():
    assert serialize_extra_info(None) == ""
    assert serialize_extra_info({"b": "1", "a": "2"}) == '{"b":"1","a":"2"}'
    assert serialize_extra_info({"a": "2", "b": "1"}) == '{"a":"2","b":"1"}'
    assert serialize_extra_info({"msg": "héllo"}) == '{"msg":"héllo"}'


def test_deserialize_extra_info():
    assert deserialize_extra_info("") is None
    assert deserialize_extra_info('{"type":"x"}') == {"type": "x"}
    with pytest.raises(ExtraInfoEncodingError):
        deserialize_extra_info("{")
