"""
Unit tests for exception hierarchy.
"""

import pytest

from fixedmerkle.exceptions import (
    ConfigurationError,
    FixedMerkleError,
    HashEngineError,
    InvalidConfigurationError,
    InvalidHashFunctionError,
    InvalidProofEncodingError,
    InvalidTreeHeightError,
    MerkleIndexOutOfRangeError,
    MerkleTreeEmptyError,
    MerkleTreeError,
    MerkleTreeFullError,
    ProofEncodingError,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correctly defined."""
    
    def test_base_exception(self):
        error = FixedMerkleError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"
    
    @pytest.mark.parametrize("error_class", [
        MerkleTreeFullError,
        MerkleTreeEmptyError,
        MerkleIndexOutOfRangeError,
        InvalidTreeHeightError,
    ])
    def test_tree_errors_inherit_from_base(self, error_class):
        assert issubclass(error_class, MerkleTreeError)
        assert issubclass(error_class, FixedMerkleError)
    
    def test_hash_errors_inherit_from_base(self):
        assert issubclass(InvalidHashFunctionError, HashEngineError)
        assert issubclass(HashEngineError, FixedMerkleError)
    
    def test_encoding_errors_inherit_from_base(self):
        assert issubclass(InvalidProofEncodingError, ProofEncodingError)
        assert issubclass(ProofEncodingError, FixedMerkleError)
    
    def test_configuration_errors_inherit_from_base(self):
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(ConfigurationError, FixedMerkleError)


class TestExceptionMessages:
    """Test default messages of tree errors."""
    
    def test_full_error_message(self):
        assert str(MerkleTreeFullError()) == "Merkle tree is full"
    
    def test_empty_error_message(self):
        assert str(MerkleTreeEmptyError()) == "Merkle tree is empty"
    
    def test_custom_message(self):
        assert str(MerkleTreeFullError("no room")) == "no room"
