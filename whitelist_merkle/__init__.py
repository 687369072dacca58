"""
Merkle whitelist roots and proofs for allowlisted NFT minting.
"""

from whitelist_merkle.exceptions import (
    AddressNotFoundError,
    InvalidInputError,
    LeafNotFoundError,
    WhitelistError,
)
from whitelist_merkle.tree import MerkleTree, hash_pair, verify_sorted
from whitelist_merkle.whitelist import (
    LeafEncoding,
    build_leaves,
    build_whitelist_tree,
    compute_root,
    get_proof,
    leaf_hash,
    normalize,
    to_bytes32,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "AddressNotFoundError",
    "InvalidInputError",
    "LeafNotFoundError",
    "WhitelistError",
    "MerkleTree",
    "hash_pair",
    "verify_sorted",
    "LeafEncoding",
    "build_leaves",
    "build_whitelist_tree",
    "compute_root",
    "get_proof",
    "leaf_hash",
    "normalize",
    "to_bytes32",
    "verify_proof",
]
