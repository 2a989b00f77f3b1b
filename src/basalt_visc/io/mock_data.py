from __future__ import annotations
from typing import List, Tuple

from basalt_visc.core.models import Dataset, Sample

_HAWAII = dict(SiO2=53.5, Al2O3=15.33, FexOy=10.6, Na2O=2.32, K2O=1.87, CaO=7.58, MgO=7.48, TiO2=0.94,
               label="Hawaii basalt")
_ICELAND = dict(SiO2=48.2, Al2O3=13.10, FexOy=11.2, Na2O=1.95, K2O=0.45, CaO=10.8, MgO=9.50, TiO2=1.80,
                label="Iceland tholeiite")

# (temperature °C, log10 viscosity Pa·s)
_HAWAII_POINTS: List[Tuple[float, float]] = [
    (1488, 2.268), (1470, 2.232), (1460, 2.241), (1450, 2.280), (1440, 2.322),
]
_ICELAND_POINTS: List[Tuple[float, float]] = [
    (1480, 1.850), (1450, 1.920), (1420, 2.015), (1390, 2.150), (1360, 2.350),
]

def mock_samples() -> List[Sample]:
    out: List[Sample] = []
    for comp, points in ((_HAWAII, _HAWAII_POINTS), (_ICELAND, _ICELAND_POINTS)):
        for t, v in points:
            out.append(Sample(id=len(out) + 1, temperature=t, viscosity_value=v, **comp))
    return out

def load_mock_dataset(host: str = "localhost", database: str = "basalt_research") -> Dataset:
    """Demo data standing in for a database connection; every call is a new dataset."""
    return Dataset(samples=tuple(mock_samples()), provenance=host, detail=database)
