"""
Exception hierarchy for fixedmerkle.

All custom exceptions inherit from FixedMerkleError base class.
"""


class FixedMerkleError(Exception):
    """Base exception for all fixedmerkle errors."""
    pass


# Tree Errors
class MerkleTreeError(FixedMerkleError):
    """Base exception for Merkle tree errors."""
    pass


class MerkleTreeFullError(MerkleTreeError):
    """Raised when appending to a tree whose leaves are all filled."""

    def __init__(self, message: str = "Merkle tree is full"):
        super().__init__(message)


class MerkleTreeEmptyError(MerkleTreeError):
    """Raised when querying the root or a proof of a tree with no leaves."""

    def __init__(self, message: str = "Merkle tree is empty"):
        super().__init__(message)


class MerkleIndexOutOfRangeError(MerkleTreeError):
    """Raised when a leaf index is not within the filled part of the tree."""
    pass


class InvalidTreeHeightError(MerkleTreeError):
    """Raised when a tree is constructed with an unsupported height."""
    pass


# Hashing Errors
class HashEngineError(FixedMerkleError):
    """Base exception for hash engine errors."""
    pass


class InvalidHashFunctionError(HashEngineError):
    """Raised when a hash function or algorithm name cannot be used."""
    pass


# Proof Encoding Errors
class ProofEncodingError(FixedMerkleError):
    """Base exception for proof and hash encoding errors."""
    pass


class InvalidProofEncodingError(ProofEncodingError):
    """Raised when an encoded proof or hash is malformed."""
    pass


# Configuration Errors
class ConfigurationError(FixedMerkleError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass
