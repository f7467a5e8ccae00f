"""Parsers for cabal manifests and ghc-pkg output."""
