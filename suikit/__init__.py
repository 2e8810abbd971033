"""Sui data types, BCS encoding, Ed25519 signing, transaction building and response parsing."""

__version__ = "0.1.0"