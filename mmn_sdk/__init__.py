"""
MMN ledger SDK for Python.
Convenience exports for the most common client APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import SDKConfig  # noqa: F401
from .errors import (  # noqa: F401
    CryptoError,
    DecodeError,
    EncodingError,
    EntropyUnavailable,
    ExtraInfoEncodingError,
    InvalidAddress,
    InvalidAmount,
    MmnSdkError,
    RemoteRejected,
    RpcError,
    Timeout,
    TransportError,
    ValidationError,
)

# Types
from .types.core import (  # noqa: F401
    Account,
    AddTxResponse,
    EntropyTrust,
    EphemeralKeyPair,
    HealthStatus,
    KeyPair,
    SignedTx,
    Tx,
    TxType,
)

# Addresses & amounts
from .address import decode_base58, derive_address, encode_base58, validate_address  # noqa: F401
from .amount import NATIVE_DECIMALS, format_amount, parse_amount  # noqa: F401

# Wallet
from .wallet.keys import generate_ephemeral_keypair, generate_keypair  # noqa: F401
from .wallet.pkcs8 import decode_from_wire_format, encode_to_wire_format  # noqa: F401
from .wallet.signer import sign_tx, sign_tx_with_wire_key, verify_tx  # noqa: F401

# Tx helpers
from .tx.build import build_transfer_tx, serialize_extra_info  # noqa: F401
from .tx.encode import serialize  # noqa: F401

# Clients
from .rpc.http import RpcClient  # noqa: F401
from .node import NodeClient  # noqa: F401
from .zk.client import ZkClient  # noqa: F401
from .indexer.client import IndexerClient  # noqa: F401
from .client import MmnClient  # noqa: F401
from .accounts import KeyPairAccount, ZkAccount  # noqa: F401
