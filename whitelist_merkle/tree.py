"""
Sorted-pair keccak Merkle tree over 32-byte leaves.

Pairs are ordered byte-wise before hashing so proofs carry no left/right
flags, which is what OpenZeppelin's MerkleProof.verify expects. The last node
of an odd-sized layer is promoted to the next layer unchanged.
"""

import logging
from typing import List, Sequence

from eth_utils import keccak

from whitelist_merkle.exceptions import InvalidInputError, LeafNotFoundError

logger = logging.getLogger(__name__)

HASH_SIZE = 32


def hash_pair(a: bytes, b: bytes) -> bytes:
    if a < b:
        return keccak(a + b)
    else:
        return keccak(b + a)


def verify_sorted(leaf: bytes, pf: Sequence[bytes], rt: bytes) -> bool:
    h = leaf
    for p in pf:
        h = hash_pair(h, p)
    return h == rt


class MerkleTree:
    def __init__(self, leaves: Sequence[bytes]):
        if not leaves:
            raise InvalidInputError("Cannot build a Merkle tree without leaves")
        for leaf in leaves:
            if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != HASH_SIZE:
                raise InvalidInputError(f"Leaf must be {HASH_SIZE} bytes: {leaf!r}")
        self.leaves = [bytes(leaf) for leaf in leaves]
        self.tree = self._build_tree(self.leaves)
        logger.debug("Built Merkle tree: %d leaves, depth %d, root 0x%s",
                     len(self.leaves), self.depth, self.root.hex())

    def _build_tree(self, leaves: List[bytes]) -> List[List[bytes]]:
        tree = [leaves]
        current_level = leaves
        while len(current_level) > 1:
            next_level: List[bytes] = []
            for i in range(0, len(current_level), 2):
                if i + 1 < len(current_level):
                    next_level.append(hash_pair(current_level[i], current_level[i + 1]))
                else:
                    # Promote odd node
                    next_level.append(current_level[i])
            tree.append(next_level)
            current_level = next_level
        return tree

    @property
    def root(self) -> bytes:
        return self.tree[-1][0]

    @property
    def depth(self) -> int:
        return len(self.tree) - 1

    def __len__(self) -> int:
        return len(self.leaves)

    def index_of(self, leaf: bytes) -> int:
        try:
            return self.leaves.index(leaf)
        except ValueError:
            raise LeafNotFoundError(bytes(leaf)) from None

    def get_proof(self, index: int) -> List[bytes]:
        """
        Sibling hashes from the leaf layer up to (not including) the root.

        Layers where the node is promoted without a sibling add nothing.
        """
        if not 0 <= index < len(self.leaves):
            raise InvalidInputError(f"Leaf index {index} out of range for {len(self.leaves)} leaves")
        proof: List[bytes] = []
        idx = index
        for layer in self.tree[:-1]:
            sib = idx ^ 1
            if sib < len(layer):
                proof.append(layer[sib])
            idx //= 2
        return proof

    def verify_proof(self, leaf: bytes, proof: Sequence[bytes]) -> bool:
        return verify_sorted(leaf, proof, self.root)
