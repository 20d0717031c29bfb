"""
Borsh encoding and signing of NEAR transactions carrying one FunctionCall.

Layout (all integers little-endian):
  Transaction       = signer_id:str, public_key:PublicKey, nonce:u64,
                      receiver_id:str, block_hash:[u8;32], actions:Vec<Action>
  PublicKey         = key_type:u8 (0 = ed25519), data:[u8;32]
  Action            = variant:u8 (2 = FunctionCall), method_name:str,
                      args:Vec<u8>, gas:u64, deposit:u128
  SignedTransaction = Transaction, Signature(key_type:u8, data:[u8;64])
The signature covers sha256(Transaction).
"""

from __future__ import annotations

import base64
import hashlib
import json
from dataclasses import dataclass
from typing import Any, Dict

import base58
from borsh_construct import U8, U32, U64, U128, Bytes, String
from nacl.signing import SigningKey

ED25519_KEY_TYPE = 0
FUNCTION_CALL_ACTION = 2


@dataclass(frozen=True)
class FunctionCall:
    method_name: str
    args: Dict[str, Any]
    gas: int
    deposit: int


def signing_key_from_secret(secret_key: str) -> SigningKey:
    """``ed25519:<base58 of seed||pub>`` -> nacl signing key."""
    _, _, raw = secret_key.partition(":")
    data = base58.b58decode(raw or secret_key)
    if len(data) not in (32, 64):
        raise ValueError(f"Unexpected ed25519 secret length {len(data)}")
    return SigningKey(data[:32])


def encode_function_call(call: FunctionCall) -> bytes:
    args = json.dumps(call.args, separators=(",", ":")).encode("utf-8")
    return (
        U8.build(FUNCTION_CALL_ACTION)
        + String.build(call.method_name)
        + Bytes.build(args)
        + U64.build(call.gas)
        + U128.build(call.deposit)
    )


def encode_transaction(
    *,
    signer_id: str,
    public_key: bytes,
    nonce: int,
    receiver_id: str,
    block_hash: bytes,
    call: FunctionCall,
) -> bytes:
    if len(public_key) != 32:
        raise ValueError("ed25519 public key must be 32 bytes")
    if len(block_hash) != 32:
        raise ValueError("block hash must be 32 bytes")
    return (
        String.build(signer_id)
        + U8.build(ED25519_KEY_TYPE)
        + public_key
        + U64.build(nonce)
        + String.build(receiver_id)
        + block_hash
        + U32.build(1)  # one action
        + encode_function_call(call)
    )


def sign_transaction(
    signing_key: SigningKey,
    *,
    signer_id: str,
    nonce: int,
    receiver_id: str,
    block_hash: str,
    call: FunctionCall,
) -> str:
    """Return the base64 SignedTransaction ready for ``broadcast_tx_commit``."""
    tx = encode_transaction(
        signer_id=signer_id,
        public_key=bytes(signing_key.verify_key),
        nonce=nonce,
        receiver_id=receiver_id,
        block_hash=base58.b58decode(block_hash),
        call=call,
    )
    signature = signing_key.sign(hashlib.sha256(tx).digest()).signature
    return base64.b64encode(tx + U8.build(ED25519_KEY_TYPE) + signature).decode("ascii")
