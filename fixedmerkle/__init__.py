"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

fixedmerkle - Fixed-capacity Merkle tree with inclusion proofs

fixedmerkle provides an append-only binary Merkle tree of fixed height,
a cached root hash, and generation and stateless verification of inclusion
proofs over a pluggable hash function.
"""

from fixedmerkle._version import __version__
from fixedmerkle.exceptions import (
    FixedMerkleError,
    MerkleIndexOutOfRangeError,
    MerkleTreeEmptyError,
    MerkleTreeFullError,
)
from fixedmerkle.merkle import (
    HashEngine,
    MerkleProof,
    MerkleTree,
    MerkleVerifier,
    create_hash_engine,
    verify_proof,
)

__all__ = [
    "__version__",
    "FixedMerkleError",
    "MerkleIndexOutOfRangeError",
    "MerkleTreeEmptyError",
    "MerkleTreeFullError",
    "HashEngine",
    "MerkleProof",
    "MerkleTree",
    "MerkleVerifier",
    "create_hash_engine",
    "verify_proof",
]
