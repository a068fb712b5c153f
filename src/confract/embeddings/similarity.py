"""Vector similarity."""

from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity; the 1e-8 epsilon keeps all-zero vectors at 0 instead of NaN."""
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    return float(np.dot(va, vb) / (np.linalg.norm(va) * np.linalg.norm(vb) + 1e-8))


def percent(similarity: float) -> int:
    """Similarity as a whole percentage, halves rounded up."""
    return int(np.floor(similarity * 100 + 0.5))
