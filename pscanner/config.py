from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .utils import MAX_PORT, MIN_PORT

DEFAULT_PORTS = "1-1024"
DEFAULT_WORKERS = 100
MAX_WORKERS = 10000
DEFAULT_TIMEOUT_MS = 500


class ScanConfig(BaseModel):
    """
    Validation model for scan parameters.
    Enforces strict types and safe ranges before any dial is issued.
    """
    host: str = Field(..., min_length=1)
    ports: List[int] = Field(..., min_length=1)
    workers: int = Field(DEFAULT_WORKERS, ge=1, le=MAX_WORKERS)
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, ge=0)

    model_config = {"frozen": True}

    @field_validator('host')
    @classmethod
    def validate_host(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("host is required")
        return v

    @field_validator('ports')
    @classmethod
    def validate_ports(cls, v):
        if any(p < MIN_PORT or p > MAX_PORT for p in v):
            raise ValueError(f"ports must lie in range {MIN_PORT}-{MAX_PORT}")
        return sorted(set(v))

    @property
    def effective_workers(self) -> int:
        # Never start a worker that would have nothing to dial
        return min(self.workers, len(self.ports))

    @property
    def timeout(self) -> Optional[float]:
        # 0 means the dial has no deadline
        return self.timeout_ms / 1000.0 if self.timeout_ms else None


def load_config(**values) -> ScanConfig:
    """Builds a ScanConfig, turning pydantic validation failures into ConfigError."""
    try:
        return ScanConfig(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "config"
        raise ConfigError(f"{field}: {first.get('msg', 'invalid value')}") from e
