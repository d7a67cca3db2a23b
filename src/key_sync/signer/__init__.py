"""Remote signer client: the authoritative, read-only source of keys."""

from .client import KEYSTORES_ENDPOINT, ListKeystoresResponse, SignerKeystore, Web3SignerClient

__all__ = [
    "KEYSTORES_ENDPOINT",
    "ListKeystoresResponse",
    "SignerKeystore",
    "Web3SignerClient",
]
