"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Hash engine for fixed-height Merkle trees.

The engine wraps a pluggable one-way hash function and defines how the tree
uses it:
- LeafHash(data) = H(0x00 || data)
- NodeHash(left, right) = H(0x01 || left || right)
- Empty leaf slots hold an all-zero sentinel of the digest width

The node rule is an ordered concatenation, so swapping two children changes
their parent's hash. The leaf and node prefixes keep a leaf hash from being
reinterpreted as an interior node.
"""

import hashlib
from typing import Callable, Dict, Optional, Sequence, Union

from fixedmerkle.exceptions import InvalidHashFunctionError
from fixedmerkle.logging_config import get_logger
from fixedmerkle.merkle.node import NodeAddress

logger = get_logger(__name__)

HashFunction = Callable[[bytes], bytes]
LeafData = Union[bytes, bytearray, memoryview, str]

LEAF_PREFIX = b"\x00"
NODE_PREFIX = b"\x01"

DEFAULT_HASH_ALGORITHM = "sha256"

SUPPORTED_HASH_ALGORITHMS: Dict[str, HashFunction] = {
    "sha256": lambda data: hashlib.sha256(data).digest(),
    "sha3_256": lambda data: hashlib.sha3_256(data).digest(),
    "blake2b": lambda data: hashlib.blake2b(data, digest_size=32).digest(),
    "sha512": lambda data: hashlib.sha512(data).digest(),
}


def to_bytes(data: LeafData) -> bytes:
    """
    Normalize leaf data to bytes.
    
    Args:
        data: Raw bytes-like data, or a string (encoded as UTF-8)
    
    Returns:
        Data as immutable bytes
    
    Raises:
        TypeError: If data is neither bytes-like nor str
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"Leaf data must be bytes or str, got {type(data).__name__}")


class HashEngine:
    """
    Leaf hashing and parent combination over an injected hash function.
    
    Any function mapping bytes to a fixed-width digest can be used, which
    lets tests swap in a cheap non-cryptographic hash without touching the
    addressing or proof logic.
    
    Example:
        >>> engine = HashEngine(lambda d: hashlib.sha256(d).digest(), "sha256")
        >>> left = engine.leaf_hash(b"data1")
        >>> right = engine.leaf_hash(b"data2")
        >>> parent = engine.combine(left, right)
        >>> assert parent != engine.combine(right, left)
    """
    
    def __init__(self, hash_function: HashFunction, name: str = "custom"):
        """
        Initialize engine and probe the digest width.
        
        Args:
            hash_function: One-way function from bytes to a fixed-width digest
            name: Human-readable name used in logs
        
        Raises:
            InvalidHashFunctionError: If the function is not callable or does
                not return a non-empty bytes digest
        """
        if not callable(hash_function):
            raise InvalidHashFunctionError("hash_function must be callable")
        
        probe = hash_function(b"")
        if not isinstance(probe, bytes) or len(probe) == 0:
            raise InvalidHashFunctionError(
                f"Hash function '{name}' must return a non-empty bytes digest"
            )
        
        self.name = name
        self._hash_function = hash_function
        self.digest_size = len(probe)
        self.empty_sentinel = b"\x00" * self.digest_size
    
    def __repr__(self) -> str:
        return f"HashEngine(name={self.name!r}, digest_size={self.digest_size})"
    
    def _digest(self, data: bytes) -> bytes:
        digest = self._hash_function(data)
        if not isinstance(digest, bytes) or len(digest) != self.digest_size:
            raise InvalidHashFunctionError(
                f"Hash function '{self.name}' returned a digest of unexpected width"
            )
        return digest
    
    def leaf_hash(self, data: LeafData) -> bytes:
        """
        Hash raw leaf data.
        
        Args:
            data: Raw leaf data (bytes, or str encoded as UTF-8)
        
        Returns:
            Leaf hash of digest_size bytes
        """
        return self._digest(LEAF_PREFIX + to_bytes(data))
    
    def combine(self, left: bytes, right: bytes) -> bytes:
        """
        Hash a pair of child hashes into their parent hash.
        
        Args:
            left: Left child hash
            right: Right child hash
        
        Returns:
            Parent hash; depends on the order of the children
        """
        return self._digest(NODE_PREFIX + left + right)
    
    def node_hash(self, address: NodeAddress, leaves: Sequence[bytes]) -> bytes:
        """
        Evaluate the hash of any node over a leaf array.
        
        Leaves return their stored value (a data hash or the empty
        sentinel); interior nodes combine their children recursively.
        
        Args:
            address: Node to evaluate
            leaves: Full leaf array of the tree, length 2^tree_height
        
        Returns:
            Hash of the node
        """
        if address.is_leaf():
            return leaves[address.index]
        
        left_hash = self.node_hash(address.left_child(), leaves)
        right_hash = self.node_hash(address.right_child(), leaves)
        return self.combine(left_hash, right_hash)


def create_hash_engine(algorithm: Optional[str] = None) -> HashEngine:
    """
    Factory function to create a hash engine from an algorithm name.
    
    Args:
        algorithm: One of SUPPORTED_HASH_ALGORITHMS (default: "sha256")
    
    Returns:
        HashEngine for the algorithm
    
    Raises:
        InvalidHashFunctionError: If algorithm is not supported
    """
    if algorithm is None:
        algorithm = DEFAULT_HASH_ALGORITHM
    
    hash_function = SUPPORTED_HASH_ALGORITHMS.get(algorithm)
    if hash_function is None:
        raise InvalidHashFunctionError(
            f"Unknown hash algorithm: {algorithm}. "
            f"Supported: {sorted(SUPPORTED_HASH_ALGORITHMS)}"
        )
    
    logger.debug(f"Created hash engine for {algorithm}")
    return HashEngine(hash_function, algorithm)


_default_engine: Optional[HashEngine] = None


def default_hash_engine() -> HashEngine:
    """Return the shared SHA-256 engine."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_hash_engine(DEFAULT_HASH_ALGORITHM)
    return _default_engine
