"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Fixedmerkle, a product of Garudex Labs

Node addressing for fixed-height binary Merkle trees.

A node is located by its level (0 for the root, tree_height for leaves) and
its index within that level (0 for the leftmost node). Addresses are plain
values: they perform no validation, so callers are responsible for never
asking a root for its sibling or a leaf for its children.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class NodeAddress:
    """
    Location of a single node in a tree of fixed height.
    
    Attributes:
        level: Depth of the node; the root is at level 0
        index: Position within the level, counted from the left
        tree_height: Height of the tree the address belongs to
    """
    level: int
    index: int
    tree_height: int
    
    @classmethod
    def root(cls, tree_height: int) -> "NodeAddress":
        return cls(0, 0, tree_height)
    
    @classmethod
    def leaf(cls, leaf_index: int, tree_height: int) -> "NodeAddress":
        return cls(tree_height, leaf_index, tree_height)
    
    def is_leaf(self) -> bool:
        """Return True if the node is on the last level and has no children."""
        return self.level == self.tree_height
    
    def is_root(self) -> bool:
        return self.level == 0
    
    def is_left_child(self) -> bool:
        """Return True if the node is the left (even-indexed) child of its parent."""
        return self.index % 2 == 0
    
    def left_child(self) -> "NodeAddress":
        return NodeAddress(self.level + 1, 2 * self.index, self.tree_height)
    
    def right_child(self) -> "NodeAddress":
        return NodeAddress(self.level + 1, 2 * self.index + 1, self.tree_height)
    
    def parent(self) -> "NodeAddress":
        return NodeAddress(self.level - 1, self.index // 2, self.tree_height)
    
    def sibling(self) -> "NodeAddress":
        """
        Get the node on the same level that shares this node's parent.
        
        Siblings pair up as (0, 1), (2, 3), (4, 5), ... so an even index maps
        to the next index and an odd index to the previous one.
        
        Returns:
            Address of the sibling node
        """
        if self.index % 2 == 0:
            return NodeAddress(self.level, self.index + 1, self.tree_height)
        return NodeAddress(self.level, self.index - 1, self.tree_height)
    
    def path_to_root(self) -> List["NodeAddress"]:
        """
        Get the path from this leaf up to, but excluding, the root.
        
        Returns:
            List of tree_height addresses: this leaf first, then its parent,
            and so on up to the child of the root
        """
        path = []
        node = self
        while not node.is_root():
            path.append(node)
            node = node.parent()
        return path


def path_from_leaf_to_root(leaf_index: int, tree_height: int) -> List[NodeAddress]:
    """
    Compute the addresses visited when ascending from a leaf to the root.
    
    Starts at (tree_height, leaf_index); each step halves the index (floor
    division) and decrements the level. The root itself is not included.
    
    Args:
        leaf_index: Index of the leaf (0-based)
        tree_height: Height of the tree
    
    Returns:
        List of exactly tree_height addresses ordered leaf to root
    """
    return NodeAddress.leaf(leaf_index, tree_height).path_to_root()
