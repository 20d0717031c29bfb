"""
Deterministic signing keys for the pause dispatcher.

No private key is ever stored: every operation re-derives its key from the
configured seed phrase and a per-chain derivation path.

NEAR   m/44'/397'/<index>'   BIP39 seed -> SLIP-0010 ed25519
EVM    m/44'/60'/0'/<index>  BIP39 seed -> BIP32 secp256k1 (eth_account HD wallet)
"""

from __future__ import annotations

import hashlib
import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Optional

import base58
from bip_utils import Bip32Slip10Ed25519
from eth_account import Account
from eth_keys import keys
from nacl.signing import SigningKey

from .chain_registry import ChainDescriptor, ChainFamily
from .pause_config import ETHEREUM_DERIVATION_PATH, NEAR_DERIVATION_PATH, PauseConfig
from .pause_errors import DerivationError

log = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()

MNEMONIC_RE = re.compile(r"^[a-z]+(?:\s[a-z]+){11,23}$")
PATH_RE = re.compile(r"^m(?:/\d+'?)+$")
ED25519_PREFIX = "ed25519:"


@dataclass(frozen=True)
class Credential:
    """Key material for one operation. Never cached."""

    public_key: str
    secret_key: str = field(repr=False)
    derivation_path: str
    implicit_account_id: Optional[str] = None  # NEAR
    address: Optional[str] = None              # EVM


# ---------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------
def _nfkd(s: str) -> str:
    return unicodedata.normalize("NFKD", s)


def normalize_mnemonic(seed_phrase: str) -> str:
    words = [w.lower() for w in (seed_phrase or "").split()]
    mnemonic = " ".join(words)
    if not MNEMONIC_RE.match(mnemonic):
        raise DerivationError(f"Malformed seed phrase ({len(words)} words)")
    return mnemonic


def check_path(derivation_path: str) -> str:
    path = (derivation_path or "").strip()
    if not PATH_RE.match(path):
        raise DerivationError(f"Malformed derivation path {derivation_path!r}")
    return path


def _bip39_seed(mnemonic: str, passphrase: str = "") -> bytes:
    # PBKDF2-HMAC-SHA512(mnemonic, "mnemonic"+passphrase, 2048, 64); no checksum check
    password = _nfkd(mnemonic)
    salt = "mnemonic" + _nfkd(passphrase or "")
    return hashlib.pbkdf2_hmac("sha512", password.encode(), salt.encode(), 2048, dklen=64)


def implicit_account_id(public_key: str) -> str:
    """Hex of the raw key bytes behind ``ed25519:<base58>``."""
    _, _, raw = public_key.partition(":")
    return base58.b58decode(raw or public_key).hex()


# ---------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------
def derive_near_credential(seed_phrase: str, derivation_path: str) -> Credential:
    mnemonic = normalize_mnemonic(seed_phrase)
    path = check_path(derivation_path)
    try:
        ctx = Bip32Slip10Ed25519.FromSeed(_bip39_seed(mnemonic)).DerivePath(path)
        seed = ctx.PrivateKey().Raw().ToBytes()
    except Exception as e:  # noqa: BLE001
        raise DerivationError(f"Cannot derive ed25519 key at {path}: {e}") from e

    pub = bytes(SigningKey(seed).verify_key)
    public_key = ED25519_PREFIX + base58.b58encode(pub).decode()
    return Credential(
        public_key=public_key,
        secret_key=ED25519_PREFIX + base58.b58encode(seed + pub).decode(),
        derivation_path=path,
        implicit_account_id=implicit_account_id(public_key),
    )


def derive_evm_credential(seed_phrase: str, derivation_path: str) -> Credential:
    mnemonic = normalize_mnemonic(seed_phrase)
    path = check_path(derivation_path)
    try:
        acct = Account.from_mnemonic(mnemonic, account_path=path)
    except Exception as e:  # noqa: BLE001
        raise DerivationError(f"Cannot derive HD wallet at {path}: {e}") from e

    key = bytes(acct.key)
    return Credential(
        public_key=keys.PrivateKey(key).public_key.to_hex(),
        secret_key="0x" + key.hex(),
        derivation_path=path,
        address=acct.address,
    )


class KeyDeriver:
    """Picks seed phrase + path per chain family and derives a fresh credential."""

    def __init__(self, config: PauseConfig):
        self._config = config

    def seed_phrase_for(self, family: ChainFamily) -> str:
        if family is ChainFamily.NEAR:
            return self._config.near_mnemonic
        return self._config.ethereum_mnemonic

    @staticmethod
    def derivation_path_for(descriptor: ChainDescriptor, override_path: Optional[str] = None) -> str:
        if override_path:
            return override_path
        if descriptor.family is ChainFamily.NEAR:
            # trailing ' is required: ed25519 only derives hardened children
            return f"{NEAR_DERIVATION_PATH}/{descriptor.index}'"
        return f"{ETHEREUM_DERIVATION_PATH}/{descriptor.index}"

    @staticmethod
    def derive(family: ChainFamily, seed_phrase: str, derivation_path: str) -> Credential:
        if family is ChainFamily.NEAR:
            return derive_near_credential(seed_phrase, derivation_path)
        return derive_evm_credential(seed_phrase, derivation_path)

    def derive_for_chain(self, descriptor: ChainDescriptor, override_path: Optional[str] = None) -> Credential:
        path = self.derivation_path_for(descriptor, override_path)
        log.info("Deriving public key from %s", path)
        credential = self.derive(descriptor.family, self.seed_phrase_for(descriptor.family), path)
        log.info("Public Key: %s", credential.public_key)
        return credential
