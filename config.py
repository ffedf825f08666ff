"""Configuration management for URL shortener."""

from datetime import timedelta
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator

from shortener.common.auth import is_sha256_hex
from shortener.common.url_builder import build_canonical_host


class Config(BaseSettings):
    """Application configuration."""
    
    # Server settings
    host: str = Field(
        default="localhost",
        min_length=1,
        description="Public hostname; requests for other hosts are redirected here"
    )
    
    port: int = Field(
        default=443,
        gt=0,
        description="HTTPS listen port"
    )
    
    bind_address: str = Field(
        default="0.0.0.0",
        description="Address the server socket binds to"
    )
    
    tls_key_file: Optional[str] = Field(
        default=None,
        description="TLS private key file (serve plain HTTP if not set)"
    )
    
    tls_cert_file: Optional[str] = Field(
        default=None,
        description="TLS certificate chain file"
    )
    
    # URL shortener settings
    base_url: Optional[str] = Field(
        default=None,
        description="Canonical base URL for short links (derived from host and port if not set)"
    )
    
    token_sha256: str = Field(
        ...,
        description="SHA-256 hex digest of the secret token"
    )
    
    url_ttl_seconds: float = Field(
        default=3600,
        gt=0,
        description="Short URLs expire after this many seconds unless a ttl is given"
    )
    
    reaper_interval_seconds: float = Field(
        default=30,
        gt=0,
        description="Seconds between passes of the expired entry reaper"
    )
    
    max_collision_retries: int = Field(
        default=2,
        ge=0,
        description="Retries when a generated identifier is already in use"
    )
    
    enforce_canonical_host: bool = Field(
        default=True,
        description="Redirect requests for other hostnames to the canonical host"
    )
    
    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )
    
    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }
    
    @field_validator("token_sha256")
    @classmethod
    def validate_token_sha256(cls, v: str) -> str:
        v = v.strip().lower()
        if not is_sha256_hex(v):
            raise ValueError("token_sha256 must be a valid sha256 sum")
        return v
    
    @model_validator(mode="after")
    def derive_base_url(self) -> "Config":
        """Fill in base_url from host and port."""
        if not self.base_url:
            self.base_url = build_canonical_host(self.host, self.port)
        else:
            self.base_url = self.base_url.rstrip("/")
        return self
    
    @property
    def url_ttl(self) -> timedelta:
        return timedelta(seconds=self.url_ttl_seconds)


def load_config(**overrides) -> Config:
    """Load configuration from environment."""
    return Config(**overrides)
