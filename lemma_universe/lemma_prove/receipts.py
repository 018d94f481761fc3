"""
Run receipts: JSON summary of a proof run.

Provides:
- build_receipt: counts, guaranteed lines and a stable fingerprint
- save_receipt: write receipt to <output_dir>/lemma_<id>.json
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from lemma_core.order_hash import equality_fingerprint

from .prover import ProofResult, format_guaranteed


def build_receipt(lemma: int, result: ProofResult) -> Dict[str, Any]:
    """
    Build a receipt dictionary for a proof run.

    Args:
        lemma: Lemma id
        result: Outcome of prove_lemma

    Returns:
        Receipt dictionary (JSON-serializable). Everything except
        'timestamp' is identical across runs on the same input.
    """
    return {
        "lemma": lemma,
        "timestamp": datetime.now().isoformat(),
        "candidates": result.candidates,
        "contradictions": result.contradictions,
        "excluded": result.excluded,
        "abiding": result.abiding,
        "guaranteed": format_guaranteed(result),
        "guaranteed_hash": equality_fingerprint(result.guaranteed),
    }


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> Path:
    """
    Save receipt to JSON file.

    Args:
        receipt: Receipt dictionary
        output_dir: Directory to save receipt (created if missing)

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    receipt_file = output_dir / f"lemma_{receipt['lemma']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)

    return receipt_file
