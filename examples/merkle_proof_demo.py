#!/usr/bin/env python
"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Demo of inclusion proofs with fixedmerkle.

This example appends a few records to a tree, hands the root and one proof
to a verifier as JSON, and shows that the proof stops matching once more
data is appended.
"""

import json
import tempfile
from pathlib import Path

from fixedmerkle.logging_config import (
    setup_logging,
    get_logger,
    set_correlation_id,
    clear_correlation_id,
)
from fixedmerkle.merkle import (
    MerkleProof,
    MerkleTree,
    decode_hash,
    encode_hash,
    verify_proof,
)


def main():
    """Run inclusion proof demo."""
    
    with tempfile.TemporaryDirectory() as tmpdir:
        log_file = Path(tmpdir) / "fixedmerkle.log"
        setup_logging(level="DEBUG", log_file=log_file, json_format=True)
        
        logger = get_logger("demo")
        set_correlation_id("demo-run")
        
        print("=" * 60)
        print("Inclusion Proof Demo")
        print("=" * 60)
        
        # 1. Build a tree
        tree = MerkleTree()
        for record in ["data1", "data2", "data3"]:
            index = tree.append(record)
            print(f"Appended {record!r} at leaf {index}")
        
        root = tree.current_root_hash()
        print(f"\nRoot: {encode_hash(root)}")
        
        # 2. Ship root and proof to a verifier
        message = json.dumps({
            "root": encode_hash(root),
            "proof": tree.generate_proof(1).to_dict(),
        }, indent=2)
        print(f"\nMessage to verifier:\n{message}")
        
        received = json.loads(message)
        trusted_root = decode_hash(received["root"], digest_size=32)
        proof = MerkleProof.from_dict(received["proof"], digest_size=32)
        
        print(f"\nverify('data2'):     {verify_proof(trusted_root, proof, 'data2')}")
        print(f"verify('fake data'): {verify_proof(trusted_root, proof, 'fake data')}")
        
        # 3. The proof is a snapshot
        tree.append("data4")
        new_root = tree.current_root_hash()
        print(f"\nAfter appending 'data4', root: {encode_hash(new_root)}")
        print(f"verify('data2') against new root: {verify_proof(new_root, proof, 'data2')}")
        
        logger.info("demo_completed", tree_size=tree.size, capacity=tree.capacity)
        clear_correlation_id()
        
        print("\n" + "=" * 60)
        print("Log file contents (JSON format):")
        print("=" * 60)
        print(log_file.read_text())


if __name__ == "__main__":
    main()
