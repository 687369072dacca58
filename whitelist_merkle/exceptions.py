"""
Exceptions raised by the whitelist Merkle tooling.
"""


class WhitelistError(Exception):
    """Base exception for all whitelist Merkle errors."""
    pass


class InvalidInputError(WhitelistError, ValueError):
    """Raised for malformed addresses, hashes, proofs or an empty whitelist."""
    pass


class AddressNotFoundError(WhitelistError, LookupError):
    """Raised when a proof is requested for an address outside the whitelist."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Address {address} is not in the whitelist")


class LeafNotFoundError(WhitelistError, LookupError):
    """Raised when a leaf hash is not part of a Merkle tree."""

    def __init__(self, leaf: bytes):
        self.leaf = leaf
        super().__init__(f"Leaf 0x{leaf.hex()} is not in the tree")
