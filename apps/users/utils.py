# apps/users/utils.py
import logging
import random
import re

from django.conf import settings
from django.core.cache import cache
from eth_account import Account
from eth_account.messages import encode_defunct

logger = logging.getLogger(__name__)

WALLET_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_wallet_address(value: str) -> bool:
    return bool(value) and bool(WALLET_RE.match(value))


def _nonce_key(wallet: str) -> str:
    return f"nonce:{wallet.lower().strip()}"


def generate_nonce(length: int = 9) -> str:
    """
    Generate a numeric nonce of `length` digits as a string.
    Example: '034591827'
    """
    if length <= 0:
        raise ValueError("length must be > 0")
    rng = random.SystemRandom()
    return "".join(str(rng.randint(0, 9)) for _ in range(length))


def issue_nonce(wallet: str) -> str:
    """
    Generate a nonce for the wallet and store it in cache.
    A new request replaces any nonce still outstanding for the same wallet.
    """
    if not wallet:
        raise ValueError("wallet is required")

    nonce = generate_nonce()
    cache.set(_nonce_key(wallet), nonce, timeout=settings.WALLET_NONCE_TTL)
    return nonce


def get_nonce(wallet: str):
    if not wallet:
        return None
    return cache.get(_nonce_key(wallet))


def consume_nonce(wallet: str) -> None:
    cache.delete(_nonce_key(wallet))


def build_sign_message(nonce: str) -> str:
    return settings.WALLET_SIGN_MESSAGE.format(nonce=nonce)


def recover_signer(nonce: str, signature: str):
    """Return the lowercase address that signed the nonce message, or None."""
    message = encode_defunct(text=build_sign_message(nonce))
    try:
        address = Account.recover_message(message, signature=signature)
    except Exception as exc:
        logger.warning("Signature recovery failed: %s", exc)
        return None
    return address.lower()


def verify_wallet_signature(wallet: str, signature: str, nonce: str) -> bool:
    if not wallet or not signature or not nonce:
        return False
    return recover_signer(nonce, signature) == wallet.lower().strip()
