"""Configuration data models"""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_API_BASE = "https://integrate.api.nvidia.com/v1"


class UpstreamConfig(BaseModel):
    """Upstream NIM provider configuration"""
    model_config = ConfigDict(validate_assignment=True)

    # No default: a missing key is reported per request, not at startup
    api_key: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    timeout: float = Field(default=25.0, gt=0)
    owned_by: str = "nvidia-nim-proxy"

    @field_validator('api_base')
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        """Validate base URL format"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('api_base must start with http:// or https://')
        return v.rstrip('/')

    @field_validator('api_key')
    @classmethod
    def blank_api_key_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty key the same as a missing one"""
        return v or None

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None


class SystemConfig(BaseModel):
    """System-level configuration"""
    model_config = ConfigDict(validate_assignment=True)

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v_upper


class ProxyConfig(BaseModel):
    """Complete application configuration

    ``model_mappings`` and ``default_model`` override the built-in model
    table when set; otherwise the built-in table is used.
    """
    model_config = ConfigDict(validate_assignment=True, protected_namespaces=())

    upstream: UpstreamConfig = Field(default_factory=UpstreamConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
    model_mappings: Optional[Dict[str, str]] = None
    default_model: Optional[str] = None
