"""Pydantic schema for analysis settings."""

import hashlib
import json
from typing import Any, Dict, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, field_validator


class DomainSettings(BaseModel):
    """Default domain of perturbation magnitudes (evenly spaced)."""
    lower: float = Field(default=-0.1, description="Smallest perturbation magnitude")
    upper: float = Field(default=0.1, description="Largest perturbation magnitude")
    points: int = Field(default=11, ge=1, description="Number of magnitudes")

    @field_validator('upper')
    @classmethod
    def validate_bounds(cls, v, info):
        """Ensure lower <= upper."""
        if 'lower' in info.data and v < info.data['lower']:
            raise ValueError("upper must not be less than lower")
        return v

    def values(self) -> Tuple[float, ...]:
        """Perturbation magnitudes, lower to upper inclusive."""
        return tuple(float(v) for v in np.linspace(self.lower, self.upper, self.points))


class ExecutionSettings(BaseModel):
    """Worker pool used to evaluate domain points."""
    max_workers: Optional[int] = Field(
        default=None,
        gt=0,
        description="Threads per registration (None: executor default)"
    )


class Settings(BaseModel):
    """Complete settings for a perturbation analysis."""
    domain: DomainSettings = Field(default_factory=DomainSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)

    def compute_hash(self) -> str:
        """Compute settings hash for reproducibility."""
        settings_str = json.dumps(self.model_dump(), sort_keys=True)
        return hashlib.sha256(settings_str.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create settings from dictionary."""
        return cls(**(data or {}))

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()
