from __future__ import annotations
import uuid
from enum import Enum
from typing import Optional, Tuple, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

COMPOSITION_FIELDS: Tuple[str, ...] = ("SiO2", "Al2O3", "FexOy", "Na2O", "K2O", "CaO", "MgO", "TiO2")
AVAILABLE_FEATURES: Tuple[str, ...] = COMPOSITION_FIELDS + ("temperature",)

class Sample(BaseModel):
    """One normalized melt measurement (oxides in wt%, T in °C, log10 Pa·s)."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    SiO2: float = 0.0
    Al2O3: float = 0.0
    FexOy: float = 0.0
    Na2O: float = 0.0
    K2O: float = 0.0
    CaO: float = 0.0
    MgO: float = 0.0
    TiO2: float = 0.0
    temperature: float = 0.0
    viscosity_value: float = 0.0
    label: str = ""
    is_measured: bool = True

    def composition(self) -> Tuple[float, ...]:
        return tuple(getattr(self, f) for f in COMPOSITION_FIELDS)

def _new_token() -> str:
    return uuid.uuid4().hex

class Dataset(BaseModel):
    """An accepted sample set plus where it came from.

    Every load gets a fresh ``token``; the selection policy treats a new token
    as a wholesale replacement even when the samples are identical.
    """
    model_config = ConfigDict(frozen=True)

    samples: Tuple[Sample, ...] = ()
    provenance: str = ""
    detail: str = ""
    token: str = Field(default_factory=_new_token)

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def is_empty(self) -> bool:
        return not self.samples

class ModelType(str, Enum):
    DISTILLATION = "distillation"
    PHYSICS_LIGHTGBM = "physics_lightgbm"
    STACKING = "stacking"
    XGBOOST = "xgboost"
    MLP = "mlp"

    @property
    def description(self) -> str:
        return _MODEL_DESCRIPTIONS[self]

_MODEL_DESCRIPTIONS = {
    ModelType.DISTILLATION: "Teacher-student distillation: an ensemble guides a light model for edge deployment.",
    ModelType.PHYSICS_LIGHTGBM: "Physics-informed LightGBM with Arrhenius features; robust on small, noisy data.",
    ModelType.STACKING: "Stacking ensemble (XGBoost, LightGBM, RandomForest + linear meta-learner).",
    ModelType.XGBOOST: "Gradient-boosted trees, the general-purpose industry baseline.",
    ModelType.MLP: "Multi-layer perceptron for non-linear relationships.",
}

class DbConfig(BaseModel):
    host: str = "localhost"
    port: str = "3306"
    user: str = "root"
    password: Optional[str] = Field(default=None, exclude=True)
    database: str = "basalt_research"
    table: str = "melt_data"

    @field_validator("host", "database", "table")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

class TrainingConfig(BaseModel):
    target: str = "viscosityValue"
    features: List[str] = Field(default_factory=lambda: list(AVAILABLE_FEATURES))
    test_size: float = 0.2
    model_type: ModelType = ModelType.PHYSICS_LIGHTGBM
    db_config: DbConfig = Field(default_factory=DbConfig)

    @field_validator("test_size")
    @classmethod
    def open_unit_interval(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError(f"test_size must be strictly between 0 and 1, got {v}")
        return v

    @model_validator(mode="after")
    def check_features(self) -> "TrainingConfig":
        if not self.features:
            raise ValueError("features must not be empty")
        if self.target in self.features:
            raise ValueError(f"target '{self.target}' cannot also be a feature")
        return self

    def payload(self) -> dict:
        """Request shape handed to the code-generation service."""
        return {
            "target": self.target,
            "features": list(self.features),
            "testSize": self.test_size,
            "modelType": self.model_type.value,
            "dbConfig": self.db_config.model_dump(),
        }
