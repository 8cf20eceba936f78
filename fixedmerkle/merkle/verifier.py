"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Stateless verification of Merkle inclusion proofs.

Verification needs only a trusted root hash, a proof and the candidate
data; it never touches a tree. The leaf hash of the data is combined with
each sibling hash in turn, the leaf index deciding at every level whether
the running hash is the left or the right child. The proof is valid if the
result equals the root.

Verification never raises: malformed, forged or stale input yields False.
"""

import hmac
from typing import Any, Optional

from fixedmerkle.logging_config import get_logger, log_proof_verification
from fixedmerkle.merkle.hashing import HashEngine, default_hash_engine, to_bytes
from fixedmerkle.merkle.proof import MerkleProof
from fixedmerkle.merkle.tree import DEFAULT_TREE_HEIGHT

logger = get_logger(__name__)


class MerkleVerifier:
    """
    Verify inclusion proofs for trees of a known height and hash engine.
    
    Example:
        >>> verifier = MerkleVerifier(tree_height=5)
        >>> if verifier.verify(trusted_root, proof, b"data2"):
        ...     print("data2 is committed under trusted_root")
    """
    
    def __init__(
        self,
        hash_engine: Optional[HashEngine] = None,
        tree_height: Optional[int] = DEFAULT_TREE_HEIGHT,
    ):
        """
        Initialize verifier.
        
        Args:
            hash_engine: Hash engine the tree was built with (default: SHA-256)
            tree_height: Required proof length, or None to accept any length
        """
        self.hash_engine = hash_engine if hash_engine is not None else default_hash_engine()
        self.tree_height = tree_height
    
    def _rejection_reason(self, proof: Any, data: Any) -> Optional[str]:
        if not isinstance(proof, MerkleProof):
            return "proof is not a MerkleProof"
        
        if self.tree_height is not None and len(proof) != self.tree_height:
            return f"proof has {len(proof)} hashes, expected {self.tree_height}"
        
        leaf_index = proof.leaf_index
        if isinstance(leaf_index, bool) or not isinstance(leaf_index, int):
            return "leaf index is not an integer"
        if not 0 <= leaf_index < (1 << len(proof)):
            return f"leaf index {leaf_index} does not fit a tree of height {len(proof)}"
        
        for sibling_hash in proof.sibling_hashes:
            if not isinstance(sibling_hash, bytes) or len(sibling_hash) != self.hash_engine.digest_size:
                return "sibling hash has unexpected type or width"
        
        if not isinstance(data, (bytes, bytearray, memoryview, str)):
            return "data is neither bytes nor str"
        if isinstance(data, str):
            try:
                to_bytes(data)
            except UnicodeEncodeError:
                return "data is not encodable as UTF-8"
        
        return None
    
    def compute_root(self, proof: MerkleProof, data) -> Optional[bytes]:
        """
        Compute the root hash that a proof implies for some data.
        
        Args:
            proof: Inclusion proof
            data: Candidate leaf data (bytes, or str encoded as UTF-8)
        
        Returns:
            Implied root hash, or None if the proof or data is malformed
        """
        reason = self._rejection_reason(proof, data)
        if reason is not None:
            logger.debug(f"Cannot compute root from proof: {reason}")
            return None
        
        try:
            return self._replay(proof, data)
        except Exception as e:
            logger.warning(f"Cannot compute root from proof: hash engine failed: {e}")
            return None
    
    def _replay(self, proof: MerkleProof, data) -> bytes:
        current_hash = self.hash_engine.leaf_hash(data)
        index = proof.leaf_index
        
        for sibling_hash in proof.sibling_hashes:
            if index % 2 == 0:
                # Current node is the left child, sibling on the right
                current_hash = self.hash_engine.combine(current_hash, sibling_hash)
            else:
                current_hash = self.hash_engine.combine(sibling_hash, current_hash)
            index //= 2
        
        return current_hash
    
    def verify(self, root_hash: bytes, proof: MerkleProof, data) -> bool:
        """
        Verify that data is included under root_hash.
        
        Args:
            root_hash: Trusted root hash of the tree
            proof: Inclusion proof produced by MerkleTree.generate_proof()
            data: Candidate leaf data (bytes, or str encoded as UTF-8)
        
        Returns:
            True if the proof is valid, False otherwise
        """
        leaf_index = proof.leaf_index if isinstance(proof, MerkleProof) else None
        
        if not isinstance(root_hash, bytes) or len(root_hash) != self.hash_engine.digest_size:
            log_proof_verification(
                logger, False, leaf_index, reason="root hash has unexpected type or width"
            )
            return False
        
        reason = self._rejection_reason(proof, data)
        if reason is not None:
            log_proof_verification(logger, False, leaf_index, reason=reason)
            return False
        
        try:
            computed_root = self._replay(proof, data)
        except Exception as e:
            log_proof_verification(
                logger, False, leaf_index, reason="hash engine failed", error=str(e)
            )
            return False
        
        verified = hmac.compare_digest(computed_root, root_hash)
        
        log_proof_verification(
            logger,
            verified,
            leaf_index,
            reason=None if verified else "computed root does not match",
        )
        
        return verified


def verify_proof(
    root_hash: bytes,
    proof: MerkleProof,
    data,
    hash_engine: Optional[HashEngine] = None,
    tree_height: Optional[int] = DEFAULT_TREE_HEIGHT,
) -> bool:
    """
    Verify a Merkle inclusion proof.
    
    Args:
        root_hash: Trusted root hash of the tree
        proof: Inclusion proof produced by MerkleTree.generate_proof()
        data: Candidate leaf data (bytes, or str encoded as UTF-8)
        hash_engine: Hash engine the tree was built with (default: SHA-256)
        tree_height: Required proof length (default: 5), or None to accept
            any length
    
    Returns:
        True if the proof is valid, False otherwise
    """
    return MerkleVerifier(hash_engine, tree_height).verify(root_hash, proof, data)
