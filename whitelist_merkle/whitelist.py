"""
Merkle whitelist for allowlisted minting.

The root goes on-chain through ``setWhitelistRoot(root)``; each member
submits its proof with ``mint(proof)`` and the contract checks it with
OpenZeppelin's ``MerkleProof.verify``.

Leaf pre-images:

* ``packed``: the 20 address bytes, ``keccak256(abi.encodePacked(msg.sender))``
* ``padded``: the address left-padded to 32 bytes, ``keccak256(abi.encode(msg.sender))``

Addresses are lower-cased, de-duplicated and sorted before the tree is built,
so the root depends only on the set of addresses and the encoding.
"""

import bisect
import logging
from collections import abc
from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

from eth_utils import decode_hex, is_hex, is_hex_address, keccak, to_checksum_address
from web3 import Web3

from whitelist_merkle.exceptions import AddressNotFoundError, InvalidInputError
from whitelist_merkle.tree import HASH_SIZE, MerkleTree, verify_sorted

logger = logging.getLogger(__name__)

HashLike = Union[bytes, str]


class LeafEncoding(str, Enum):
    PACKED = "packed"
    PADDED = "padded"


def _encoding(encoding) -> LeafEncoding:
    try:
        return LeafEncoding(encoding)
    except ValueError:
        raise InvalidInputError(f"Unknown leaf encoding: {encoding!r}") from None


def normalize(addr: str) -> str:
    if not isinstance(addr, str):
        raise InvalidInputError(f"Address must be a hex string, got {type(addr).__name__}")
    addr = addr.strip()
    if not addr.lower().startswith("0x"):
        addr = "0x" + addr
    if not is_hex_address(addr):
        raise InvalidInputError(f"Invalid address: {addr}")
    return addr.lower()


def leaf_hash(addr: str, encoding=LeafEncoding.PACKED) -> bytes:
    a = normalize(addr)
    if _encoding(encoding) is LeafEncoding.PADDED:
        b20 = bytes.fromhex(a[2:])
        return keccak(b"\x00" * 12 + b20)
    return bytes(Web3.solidity_keccak(["address"], [to_checksum_address(a)]))


def to_bytes32(value: HashLike) -> bytes:
    """Accept a 32-byte value as raw bytes or a 0x-prefixed hex string."""
    if isinstance(value, str):
        if not is_hex(value):
            raise InvalidInputError(f"Not a hex string: {value!r}")
        try:
            value = decode_hex(value)
        except ValueError:
            raise InvalidInputError(f"Not a hex string: {value!r}") from None
    elif isinstance(value, bytearray):
        value = bytes(value)
    if not isinstance(value, bytes) or len(value) != HASH_SIZE:
        raise InvalidInputError(f"Expected a {HASH_SIZE}-byte hash, got {value!r}")
    return value


def build_leaves(addrs: Iterable[str], encoding=LeafEncoding.PACKED) -> Tuple[List[bytes], List[str]]:
    if isinstance(addrs, str):
        raise InvalidInputError("Whitelist must be a collection of addresses, not a single string")
    addrs_sorted = sorted({normalize(a) for a in addrs})
    if not addrs_sorted:
        raise InvalidInputError("Whitelist is empty")
    leaves = [leaf_hash(a, encoding) for a in addrs_sorted]
    return leaves, addrs_sorted


def build_whitelist_tree(addrs: Iterable[str], encoding=LeafEncoding.PACKED) -> Tuple[MerkleTree, List[str]]:
    """
    Build the tree for one whitelist version.

    Returns the tree together with the canonical (sorted, lower-cased,
    de-duplicated) addresses; ``addresses[i]`` owns leaf ``i``.
    """
    leaves, addrs_sorted = build_leaves(addrs, encoding)
    return MerkleTree(leaves), addrs_sorted


def compute_root(addresses: Iterable[str], encoding=LeafEncoding.PACKED) -> bytes:
    tree, _ = build_whitelist_tree(addresses, encoding)
    return tree.root


def get_proof(address: str, addresses: Iterable[str], encoding=LeafEncoding.PACKED) -> List[bytes]:
    target = normalize(address)
    tree, addrs_sorted = build_whitelist_tree(addresses, encoding)
    idx = bisect.bisect_left(addrs_sorted, target)
    if idx == len(addrs_sorted) or addrs_sorted[idx] != target:
        raise AddressNotFoundError(to_checksum_address(target))
    return tree.get_proof(idx)


def verify_proof(leaf_address: str, proof: Sequence[HashLike], root: HashLike,
                 encoding=LeafEncoding.PACKED) -> bool:
    """
    Check that ``leaf_address`` belongs to the whitelist committed to by ``root``.

    Returns False for a well-formed proof that does not lead to ``root``.
    Raises InvalidInputError when the address, a proof element or the root
    is malformed.
    """
    if isinstance(proof, (str, bytes, bytearray)) or not isinstance(proof, abc.Sequence):
        raise InvalidInputError("Proof must be a sequence of 32-byte hashes")
    lf = leaf_hash(leaf_address, encoding)
    pf = [to_bytes32(p) for p in proof]
    rt = to_bytes32(root)
    ok = verify_sorted(lf, pf, rt)
    logger.debug("Proof for %s against 0x%s: %s", leaf_address, rt.hex(), "valid" if ok else "mismatch")
    return ok
