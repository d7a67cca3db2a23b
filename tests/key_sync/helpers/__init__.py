"""In-memory stand-ins for the remote signer and the client key manager."""

from .fakes import FakeKeyLister, FakeKeyManager, make_pubkey

__all__ = [
    "FakeKeyLister",
    "FakeKeyManager",
    "make_pubkey",
]
