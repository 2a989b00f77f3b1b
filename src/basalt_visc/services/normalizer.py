from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from basalt_visc.core.models import Sample
from basalt_visc.services.resolver import first_number, first_text

LOGGER = logging.getLogger(__name__)

# Candidate key parts per canonical field, highest priority first.
FIELD_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "SiO2": ("SiO2",),
    "Al2O3": ("Al2O3",),
    "FexOy": ("Fe", "FexOy"),
    "Na2O": ("Na2O",),
    "K2O": ("K2O",),
    "CaO": ("CaO",),
    "MgO": ("MgO",),
    "TiO2": ("TiO2",),
    "temperature": ("temp", "temperature"),
    "viscosity_value": ("viscosity", "log10", "Value"),
}
LABEL_CANDIDATES: Tuple[str, ...] = ("remark", "source", "name")

def build_sample(row: Mapping[str, Any], sample_id: int) -> Sample:
    values = {field: first_number(row, *parts) for field, parts in FIELD_CANDIDATES.items()}
    return Sample(
        id=sample_id,
        label=first_text(row, *LABEL_CANDIDATES),
        is_measured=True,
        **values,
    )

def is_accepted(sample: Sample) -> bool:
    # 0 doubles as the "unresolved" sentinel, so a measured viscosity of exactly 0
    # only survives through the SiO2 branch.
    return sample.temperature > 0 and (sample.viscosity_value != 0 or sample.SiO2 != 0)

def normalize(rows: Iterable[Mapping[str, Any]]) -> List[Sample]:
    """
    Turn decoded rows into accepted samples.

    ids are the 1-based input row position, assigned before filtering, so a
    rejected row leaves a gap in the sequence.
    """
    built = [build_sample(row, idx + 1) for idx, row in enumerate(rows)]
    accepted = [s for s in built if is_accepted(s)]
    if len(accepted) < len(built):
        LOGGER.debug("Dropped %d of %d rows without temperature or viscosity/SiO2",
                      len(built) - len(accepted), len(built))
    return accepted
