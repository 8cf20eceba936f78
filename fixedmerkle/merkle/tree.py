"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Fixed-capacity Merkle tree with append-only leaves.

This module implements a binary Merkle tree of fixed height H holding up to
2^H leaf hashes. It supports:
- Appending data hashes in order until the tree is full
- A cached root hash that is recomputed on every append
- Inclusion proof generation for any filled leaf
"""

import time
from typing import List, Optional

from fixedmerkle.exceptions import (
    InvalidTreeHeightError,
    MerkleIndexOutOfRangeError,
    MerkleTreeEmptyError,
    MerkleTreeFullError,
)
from fixedmerkle.logging_config import get_logger, log_merkle_root_computation
from fixedmerkle.merkle.hashing import (
    HashEngine,
    LeafData,
    create_hash_engine,
    default_hash_engine,
)
from fixedmerkle.merkle.node import NodeAddress, path_from_leaf_to_root
from fixedmerkle.merkle.proof import MerkleProof

logger = get_logger(__name__)

DEFAULT_TREE_HEIGHT = 5
MAX_TREE_HEIGHT = 16


class MerkleTree:
    """
    Append-only binary Merkle tree with a fixed number of leaf slots.
    
    The leaf array is allocated once with 2^tree_height slots, all holding
    the engine's empty sentinel. Appended data is hashed into the next free
    slot and the root is recomputed over the whole array, so partially
    filled trees need no special handling.
    
    The tree is not thread-safe: callers must serialize append() and must
    not read the root or generate proofs during a concurrent append.
    
    Example:
        >>> tree = MerkleTree()
        >>> for item in [b"data1", b"data2", b"data3"]:
        ...     tree.append(item)
        >>> root = tree.current_root_hash()
        >>> proof = tree.generate_proof(1)
        >>> assert verify_proof(root, proof, b"data2")
    
    """
    
    def __init__(
        self,
        tree_height: int = DEFAULT_TREE_HEIGHT,
        hash_engine: Optional[HashEngine] = None,
    ):
        """
        Create an empty tree.
        
        Args:
            tree_height: Number of levels below the root (capacity is 2^tree_height)
            hash_engine: Hash engine to use (default: shared SHA-256 engine)
        
        Raises:
            InvalidTreeHeightError: If tree_height is not an int in 1..MAX_TREE_HEIGHT
        """
        if (
            isinstance(tree_height, bool)
            or not isinstance(tree_height, int)
            or not 1 <= tree_height <= MAX_TREE_HEIGHT
        ):
            raise InvalidTreeHeightError(
                f"tree_height must be an integer in [1, {MAX_TREE_HEIGHT}], got {tree_height!r}"
            )
        
        self.tree_height = tree_height
        self.capacity = 1 << tree_height
        self.hash_engine = hash_engine if hash_engine is not None else default_hash_engine()
        
        self._leaves: List[bytes] = [self.hash_engine.empty_sentinel] * self.capacity
        self._size = 0
        self._root_hash: Optional[bytes] = None
    
    @classmethod
    def from_config(cls, config) -> "MerkleTree":
        """
        Create an empty tree from configuration.
        
        Args:
            config: FixedMerkleConfig (or any object with a merkle section
                carrying tree_height and hash_algorithm)
        
        Returns:
            Empty MerkleTree
        """
        merkle_config = config.merkle
        return cls(
            tree_height=merkle_config.tree_height,
            hash_engine=create_hash_engine(merkle_config.hash_algorithm),
        )
    
    def __len__(self) -> int:
        return self._size
    
    def __repr__(self) -> str:
        return (
            f"MerkleTree(size={self._size}, capacity={self.capacity}, "
            f"hash_engine={self.hash_engine.name!r})"
        )
    
    @property
    def size(self) -> int:
        """Number of filled leaves."""
        return self._size
    
    def is_empty(self) -> bool:
        return self._size == 0
    
    def is_full(self) -> bool:
        return self._size == self.capacity
    
    def _compute_root(self) -> bytes:
        return self.hash_engine.node_hash(NodeAddress.root(self.tree_height), self._leaves)
    
    def append(self, data: LeafData) -> int:
        """
        Hash data into the next free leaf and recompute the root.
        
        Either the leaf is stored and the root updated, or the tree is left
        unchanged.
        
        Args:
            data: Raw leaf data (bytes, or str encoded as UTF-8)
        
        Returns:
            Index the leaf was stored at
        
        Raises:
            MerkleTreeFullError: If all leaf slots are filled
            TypeError: If data is neither bytes nor str
        """
        if self.is_full():
            logger.warning(f"Rejected append: tree is full ({self.capacity} leaves)")
            raise MerkleTreeFullError()
        
        leaf_hash = self.hash_engine.leaf_hash(data)
        
        start_time = time.perf_counter()
        leaf_index = self._size
        self._leaves[leaf_index] = leaf_hash
        try:
            root_hash = self._compute_root()
        except Exception:
            self._leaves[leaf_index] = self.hash_engine.empty_sentinel
            raise
        self._size += 1
        self._root_hash = root_hash
        duration_ms = (time.perf_counter() - start_time) * 1000
        
        log_merkle_root_computation(
            logger,
            tree_size=self._size,
            capacity=self.capacity,
            merkle_root=root_hash.hex(),
            duration_ms=duration_ms,
        )
        
        return leaf_index
    
    def current_root_hash(self) -> bytes:
        """
        Get the Merkle root hash.
        
        Returns:
            Root hash over the current leaves
        
        Raises:
            MerkleTreeEmptyError: If no leaves have been appended
        """
        if self.is_empty():
            logger.warning("Rejected root query: tree is empty")
            raise MerkleTreeEmptyError()
        
        return self._root_hash
    
    def _check_leaf_index(self, leaf_index: int, operation: str) -> None:
        if self.is_empty():
            logger.warning(f"Rejected {operation}: tree is empty")
            raise MerkleTreeEmptyError()
        
        if (
            isinstance(leaf_index, bool)
            or not isinstance(leaf_index, int)
            or not 0 <= leaf_index < self._size
        ):
            logger.warning(
                f"Rejected {operation}: leaf index {leaf_index!r} out of range [0, {self._size})"
            )
            raise MerkleIndexOutOfRangeError(
                f"Leaf index {leaf_index!r} out of range [0, {self._size})"
            )
    
    def leaf_hash_at(self, leaf_index: int) -> bytes:
        """
        Get the stored hash of a filled leaf.
        
        Args:
            leaf_index: Index of the leaf (0-based)
        
        Returns:
            Leaf hash
        
        Raises:
            MerkleTreeEmptyError: If no leaves have been appended
            MerkleIndexOutOfRangeError: If leaf_index is not in [0, size)
        """
        self._check_leaf_index(leaf_index, "leaf lookup")
        return self._leaves[leaf_index]
    
    def generate_proof(self, leaf_index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the leaf at the given index.
        
        The proof holds, for each node on the path from the leaf up to the
        child of the root, the hash of that node's sibling. It is a snapshot:
        once more data is appended it no longer matches the new root.
        
        Args:
            leaf_index: Index of the leaf (0-based)
        
        Returns:
            MerkleProof with exactly tree_height sibling hashes
        
        Raises:
            MerkleTreeEmptyError: If no leaves have been appended
            MerkleIndexOutOfRangeError: If leaf_index is not in [0, size)
        """
        self._check_leaf_index(leaf_index, "proof generation")
        
        sibling_hashes = tuple(
            self.hash_engine.node_hash(node.sibling(), self._leaves)
            for node in path_from_leaf_to_root(leaf_index, self.tree_height)
        )
        
        logger.debug(
            f"Generated proof for leaf {leaf_index} "
            f"({len(sibling_hashes)} sibling hashes, tree size {self._size})"
        )
        
        return MerkleProof(leaf_index=leaf_index, sibling_hashes=sibling_hashes)
