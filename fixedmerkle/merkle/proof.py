"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Inclusion proof value and its canonical encoding.

A proof is the list of sibling hashes met while ascending from one leaf to
the root, together with the leaf index. The index fixes, level by level,
whether the ascending node was a left or right child, so the proof carries
its own orientation.

Hashes that leave the process are encoded as lowercase hex of a fixed width
so byte-for-byte comparison stays unambiguous.
"""

import binascii
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from fixedmerkle.exceptions import InvalidProofEncodingError


@dataclass(frozen=True)
class MerkleProof:
    """
    Proof that a leaf is included under a given root.
    
    Attributes:
        leaf_index: Index of the proven leaf (0-based)
        sibling_hashes: Sibling hashes ordered from the leaf's sibling up to
            the sibling of the root's child; one per tree level
    """
    leaf_index: int
    sibling_hashes: Tuple[bytes, ...]
    
    def __post_init__(self):
        if not isinstance(self.sibling_hashes, tuple):
            object.__setattr__(self, "sibling_hashes", tuple(self.sibling_hashes))
    
    def __len__(self) -> int:
        return len(self.sibling_hashes)
    
    def __iter__(self) -> Iterator[bytes]:
        return iter(self.sibling_hashes)
    
    @property
    def directions(self) -> List[str]:
        """
        Side on which each sibling sits ("left" or "right"), leaf to root.
        """
        directions = []
        index = self.leaf_index
        for _ in self.sibling_hashes:
            directions.append("right" if index % 2 == 0 else "left")
            index //= 2
        return directions
    
    def to_dict(self) -> Dict[str, Any]:
        """
        Encode proof into its canonical JSON-compatible form.
        
        Returns:
            Dictionary with leaf_index and hex-encoded sibling_hashes
        """
        return {
            "leaf_index": self.leaf_index,
            "sibling_hashes": [encode_hash(h) for h in self.sibling_hashes],
        }
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any], digest_size: Optional[int] = None) -> "MerkleProof":
        """
        Decode proof from its canonical form.
        
        Args:
            data: Dictionary produced by to_dict()
            digest_size: Expected width in bytes of every hash; if None, all
                hashes must share the width of the first one
        
        Returns:
            Decoded MerkleProof
        
        Raises:
            InvalidProofEncodingError: If the encoding is malformed
        """
        if not isinstance(data, dict):
            raise InvalidProofEncodingError("Encoded proof must be a mapping")
        
        try:
            leaf_index = data["leaf_index"]
            encoded_hashes = data["sibling_hashes"]
        except KeyError as e:
            raise InvalidProofEncodingError(f"Encoded proof is missing field {e}")
        
        # bool is an int subclass but never a valid index
        if isinstance(leaf_index, bool) or not isinstance(leaf_index, int) or leaf_index < 0:
            raise InvalidProofEncodingError(f"Invalid leaf_index: {leaf_index!r}")
        
        if not isinstance(encoded_hashes, list):
            raise InvalidProofEncodingError("sibling_hashes must be a list")
        
        sibling_hashes = []
        for encoded in encoded_hashes:
            value = decode_hash(encoded, digest_size)
            if digest_size is None:
                digest_size = len(value)
            sibling_hashes.append(value)
        
        return cls(leaf_index=leaf_index, sibling_hashes=tuple(sibling_hashes))


def encode_hash(value: bytes) -> str:
    """Encode a hash value as lowercase hex."""
    return value.hex()


def decode_hash(text: str, digest_size: Optional[int] = None) -> bytes:
    """
    Decode a lowercase hex hash value.
    
    Args:
        text: Hex string produced by encode_hash()
        digest_size: Expected width in bytes, or None to accept any width
    
    Returns:
        Decoded hash bytes
    
    Raises:
        InvalidProofEncodingError: If text is not canonical hex of the expected width
    """
    if not isinstance(text, str) or not text or text != text.lower():
        raise InvalidProofEncodingError(f"Hash must be a non-empty lowercase hex string: {text!r}")
    
    try:
        value = binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise InvalidProofEncodingError(f"Hash is not valid hex: {e}")
    
    if digest_size is not None and len(value) != digest_size:
        raise InvalidProofEncodingError(
            f"Hash has width {len(value)} bytes, expected {digest_size}"
        )
    
    return value
