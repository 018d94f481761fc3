"""
lemma_core: Core primitives for the edge-equality prover.

Provides:
- types: Matrix, Edge, EqualityPair and equality normalization
- errors: fatal error hierarchy (LemmaError and subclasses)
- order_hash: deterministic hashing (SHA-256) for receipts
- pattern: template expansion over {0,1,?}
- union_find: disjoint-set forest with dense non-trivial labels
"""

__all__ = [
    "errors",
    "order_hash",
    "pattern",
    "types",
    "union_find",
]
