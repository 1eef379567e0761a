"""
Tree navigation over generated bitting lists.
"""

from .bitting_tree import BittingTreeNavigator, build_tree, create_navigator

__all__ = [
    "BittingTreeNavigator",
    "build_tree",
    "create_navigator",
]
