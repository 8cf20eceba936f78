"""
Fixed-height Merkle tree with inclusion proofs.

This module provides node addressing, hashing, tree construction, proof
generation, and stateless proof verification.
"""

from fixedmerkle.merkle.hashing import (
    HashEngine,
    SUPPORTED_HASH_ALGORITHMS,
    create_hash_engine,
    default_hash_engine,
)
from fixedmerkle.merkle.node import NodeAddress, path_from_leaf_to_root
from fixedmerkle.merkle.proof import MerkleProof, decode_hash, encode_hash
from fixedmerkle.merkle.tree import DEFAULT_TREE_HEIGHT, MAX_TREE_HEIGHT, MerkleTree
from fixedmerkle.merkle.verifier import MerkleVerifier, verify_proof

__all__ = [
    "HashEngine",
    "SUPPORTED_HASH_ALGORITHMS",
    "create_hash_engine",
    "default_hash_engine",
    "NodeAddress",
    "path_from_leaf_to_root",
    "MerkleProof",
    "decode_hash",
    "encode_hash",
    "DEFAULT_TREE_HEIGHT",
    "MAX_TREE_HEIGHT",
    "MerkleTree",
    "MerkleVerifier",
    "verify_proof",
]
