import base64
import json

import pytest

from mmn_sdk.address import decode_base58, encode_base58
from mmn_sdk.errors import DecodeError, ValidationError
from mmn_sdk.tx.build import build_transfer_tx
from mmn_sdk.tx.encode import (
    DONATION_CAMPAIGN_FEED,
    pack_user_sig,
    serialize,
    signed_tx_to_wire,
    tx_from_wire,
    tx_to_wire,
    unpack_user_sig,
    validate_tx_addresses,
)
from mmn_sdk.types.core import SignedTx, TxType
from mmn_sdk.wallet.keys import generate_keypair


def _tx(alice, bob, **kw):
    args = dict(timestamp=1_700_000_000, text_data="memo", extra_info={"type": "x"})
    args.update(kw)
    return build_transfer_tx(TxType.FAUCET, alice, bob, "100", 1, **args)


def test_serialize_layout(alice, bob):
    tx = _tx(alice, bob)
    expected = f'1|{alice}|{bob}|100|memo|1|{{"type":"x"}}'.encode("utf-8")
    assert serialize(tx) == expected


def test_serialize_empty_optionals(alice, bob):
    tx = build_transfer_tx(TxType.USER_CONTENT, alice, bob, 5, 0, timestamp=1)
    assert serialize(tx) == f"2|{alice}|{bob}|5||0|".encode()


def test_serialize_excludes_timestamp_and_zk_fields(alice, bob):
    a = _tx(alice, bob, timestamp=1, zk_proof="", zk_pub="")
    b = _tx(alice, bob, timestamp=2, zk_proof="proof", zk_pub="pub")
    assert serialize(a) == serialize(b)


def test_serialize_utf8_text(alice, bob):
    tx = _tx(alice, bob, text_data="café")
    assert "café".encode("utf-8") in serialize(tx)


def test_pack_user_sig_shape():
    pk, sig = bytes(range(32)), bytes(range(64))
    text = pack_user_sig(pk, sig)
    doc = json.loads(decode_base58(text))
    assert list(doc) == ["PubKey", "Sig"]
    assert base64.b64decode(doc["PubKey"]) == pk
    assert base64.b64decode(doc["Sig"]) == sig
    # compact separators, matching the node's decoder
    assert b", " not in decode_base58(text) and b": " not in decode_base58(text)
    assert unpack_user_sig(text) == (pk, sig)


def _b58json(obj) -> str:
    return encode_base58(json.dumps(obj).encode())


@pytest.mark.parametrize(
    "text",
    [
        "0OIl",
        encode_base58(b"not json"),
        encode_base58(b"\xff\xfe"),
        _b58json([1, 2]),
        _b58json({"PubKey": base64.b64encode(bytes(32)).decode()}),
        _b58json({"PubKey": "!!!", "Sig": base64.b64encode(bytes(64)).decode()}),
        _b58json({"PubKey": base64.b64encode(bytes(31)).decode(), "Sig": base64.b64encode(bytes(64)).decode()}),
        _b58json({"PubKey": base64.b64encode(bytes(32)).decode(), "Sig": base64.b64encode(bytes(63)).decode()}),
        _b58json({"PubKey": 1, "Sig": 2}),
    ],
)
def test_unpack_user_sig_rejects_malformed(text):
    with pytest.raises(DecodeError):
        unpack_user_sig(text)


def test_wire_roundtrip(alice, bob):
    tx = _tx(alice, bob, zk_proof="zp", zk_pub="zpub")
    wire = tx_to_wire(tx)
    assert wire == {
        "type": 1,
        "sender": alice,
        "recipient": bob,
        "amount": "100",
        "timestamp": 1_700_000_000,
        "text_data": "memo",
        "nonce": 1,
        "extra_info": '{"type":"x"}',
        "zk_proof": "zp",
        "zk_pub": "zpub",
    }
    assert tx_from_wire(wire) == tx


def test_tx_from_wire_validates(alice):
    with pytest.raises(ValidationError):
        tx_from_wire({"type": 1, "sender": alice, "recipient": alice, "amount": "1", "nonce": 0})


def test_signed_tx_to_wire(alice, bob):
    tx = _tx(alice, bob)
    wire = signed_tx_to_wire(SignedTx(tx=tx, signature="sig"))
    assert wire["signature"] == "sig"
    assert wire["tx_msg"]["amount"] == "100"


# ---------- campaign feed recipient ----------

OFF_CURVE = bytes(i * 3 + 7 for i in range(32))
FEED = {"type": DONATION_CAMPAIGN_FEED}


def _feed(sender, recipient, extra_info=FEED):
    return build_transfer_tx(TxType.USER_CONTENT, sender, recipient, 1, 1, timestamp=1, extra_info=extra_info)


def test_validate_addresses_generated_key(alice):
    with generate_keypair() as kp:
        assert validate_tx_addresses(_feed(alice, encode_base58(kp.public_key)))


def test_validate_addresses_rfc_key(alice, rfc_address):
    assert validate_tx_addresses(_feed(alice, rfc_address))


def test_validate_addresses_off_curve_recipient(alice):
    assert not validate_tx_addresses(_feed(alice, encode_base58(OFF_CURVE)))


def test_validate_addresses_other_content_types_unchecked(alice):
    assert validate_tx_addresses(_feed(alice, encode_base58(OFF_CURVE), {"type": "post"}))
    assert validate_tx_addresses(_feed(alice, encode_base58(OFF_CURVE), {}))


def test_validate_addresses_user_content_without_extra_info(alice, bob):
    assert not validate_tx_addresses(_feed(alice, bob, None))


def test_validate_addresses_ignores_transfers(alice):
    tx = build_transfer_tx(TxType.TRANSFER_BY_ZK, alice, encode_base58(OFF_CURVE), 1, 1, timestamp=1)
    assert validate_tx_addresses(tx)
