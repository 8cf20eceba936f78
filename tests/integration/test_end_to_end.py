"""
End-to-end integration tests for fixedmerkle.

Tests complete workflows:
- Append data, capture root, prove and verify inclusion
- Stale proofs after further appends
- Every fill count from one leaf to a full tree
- Tree built from a YAML configuration file
- Proof handed to an independent verifier as JSON
"""

import json

import pytest

from fixedmerkle import (
    MerkleTree,
    MerkleTreeFullError,
    MerkleVerifier,
    verify_proof,
)
from fixedmerkle.config import load_config
from fixedmerkle.merkle import MerkleProof, decode_hash, encode_hash


class TestInclusionProofScenario:
    """Three items appended to a 32-leaf tree."""
    
    def test_prove_verify_and_go_stale(self):
        tree = MerkleTree()
        tree.append("data1")
        tree.append("data2")
        tree.append("data3")
        
        root = tree.current_root_hash()
        proof = tree.generate_proof(1)
        
        assert len(proof) == 5
        assert verify_proof(root, proof, "data2") is True
        assert verify_proof(root, proof, "fake data") is False
        
        tree.append("data4")
        new_root = tree.current_root_hash()
        
        assert new_root != root
        assert verify_proof(new_root, proof, "data2") is False
        # The proof still holds for the root it was generated under
        assert verify_proof(root, proof, "data2") is True


class TestExhaustiveFill:
    """Every leaf verifies for every fill count up to capacity."""
    
    def test_all_fill_counts(self):
        capacity = MerkleTree().capacity
        
        for number_of_nodes in range(1, capacity + 1):
            tree = MerkleTree()
            data_values = [f"data {i + 1}" for i in range(number_of_nodes)]
            for value in data_values:
                tree.append(value)
            
            root = tree.current_root_hash()
            
            for i, value in enumerate(data_values):
                assert verify_proof(root, tree.generate_proof(i), value, tree_height=5)
    
    def test_fill_to_capacity_then_reject(self):
        tree = MerkleTree(tree_height=2)
        for i in range(4):
            tree.append(f"data {i}")
        
        with pytest.raises(MerkleTreeFullError):
            tree.append("overflow")
        
        assert verify_proof(tree.current_root_hash(), tree.generate_proof(3), "data 3", tree_height=2)


class TestConfiguredTree:
    """Tree built from a configuration file."""
    
    def test_tree_from_yaml_config(self, temp_dir, make_config_yaml):
        config_path = temp_dir / "config.yaml"
        config_path.write_text(make_config_yaml(tree_height=3, hash_algorithm="sha3_256"))
        config = load_config(str(config_path))
        
        tree = MerkleTree.from_config(config)
        for i in range(8):
            tree.append(f"event-{i}".encode())
        
        verifier = MerkleVerifier(tree.hash_engine, tree_height=config.merkle.tree_height)
        root = tree.current_root_hash()
        
        assert tree.is_full()
        assert all(verifier.verify(root, tree.generate_proof(i), f"event-{i}".encode()) for i in range(8))


class TestRemoteVerification:
    """Root and proof cross a process boundary as canonical JSON."""
    
    def test_verifier_needs_only_root_proof_and_data(self):
        tree = MerkleTree()
        records = [json.dumps({"id": i, "value": i * i}).encode() for i in range(12)]
        for record in records:
            tree.append(record)
        
        message = json.dumps({
            "root": encode_hash(tree.current_root_hash()),
            "proof": tree.generate_proof(7).to_dict(),
        })
        del tree
        
        received = json.loads(message)
        root = decode_hash(received["root"], digest_size=32)
        proof = MerkleProof.from_dict(received["proof"], digest_size=32)
        
        assert verify_proof(root, proof, records[7], tree_height=5)
        assert not verify_proof(root, proof, records[6], tree_height=5)
