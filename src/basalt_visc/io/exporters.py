from __future__ import annotations
import pandas as pd
from pathlib import Path
from typing import Sequence

from basalt_visc.core.models import Sample

SERIES_COLUMNS = ["id", "temperature", "viscosity_value", "label"]

def series_frame(samples: Sequence[Sample]) -> pd.DataFrame:
    return pd.DataFrame([s.model_dump(include=set(SERIES_COLUMNS)) for s in samples],
                        columns=SERIES_COLUMNS)

def series_csv(samples: Sequence[Sample]) -> str:
    return series_frame(samples).to_csv(index=False)

def export_series_csv(samples: Sequence[Sample], path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(series_csv(samples), encoding="utf-8")
