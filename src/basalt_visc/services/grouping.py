from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List

from basalt_visc.core.models import Sample

SIGNATURE_DECIMALS = 2
SIGNATURE_SEPARATOR = "-"
_QUANTUM = Decimal(1).scaleb(-SIGNATURE_DECIMALS)

def _fixed(value: float) -> str:
    # Exact binary value, ties away from zero: 0.125 -> "0.13", 15.625 -> "15.63".
    value = value or 0.0  # -0.0 -> 0.0
    if not math.isfinite(value):
        return str(value)
    return str(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))

def composition_signature(sample: Sample) -> str:
    """
    Key for "same physical sample": the eight oxides, each rounded to two
    decimals, joined in COMPOSITION_FIELDS order.

    Rounding absorbs the noise from re-parsing decimal text (53.500001 and
    53.4999994 both give "53.50"); raw float equality is never used.
    """
    return SIGNATURE_SEPARATOR.join(_fixed(v) for v in sample.composition())

def group_samples(samples: Iterable[Sample]) -> Dict[str, List[Sample]]:
    """Partition by signature; groups keep first-seen order, members keep input order."""
    groups: Dict[str, List[Sample]] = {}
    for s in samples:
        groups.setdefault(composition_signature(s), []).append(s)
    return groups
