"""cabal-inventory core package.

Resolves the transitive Haskell package dependencies of a cabal project and
describes each one for a license inventory.
"""

__all__ = [
    "core",
]
