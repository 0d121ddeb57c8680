"""
Enforcement settings domain model.

Controls concurrency, audit event identity, host discovery and the WinRM
transport used for remote hosts.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from autonetbios.domain.config.credential import Credential

logger = logging.getLogger(__name__)


class WinRMSettings(BaseModel):
    """
    WinRM transport settings.

    A single transport/auth combination is used per run; there is no
    fallback chain and no retry.
    """

    transport: str = Field(default="http", description="http or https")
    auth: str = Field(default="negotiate", description="negotiate, kerberos, ntlm or basic")
    port_http: int = Field(default=5985, ge=1, le=65535)
    port_https: int = Field(default=5986, ge=1, le=65535)
    verify_ssl: bool = Field(default=True, description="Validate server certificates over HTTPS")
    operation_timeout_sec: int = Field(default=60, ge=5, le=600)
    read_timeout_sec: int = Field(default=70, ge=10, le=660)

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError("transport must be 'http' or 'https'")
        return v

    @field_validator("auth")
    @classmethod
    def validate_auth(cls, v: str) -> str:
        v = v.lower()
        if v not in ("negotiate", "kerberos", "ntlm", "basic"):
            raise ValueError("auth must be one of negotiate, kerberos, ntlm, basic")
        return v

    @field_validator("read_timeout_sec")
    @classmethod
    def validate_read_timeout(cls, v: int, info) -> int:
        operation = info.data.get("operation_timeout_sec")
        if operation is not None and v <= operation:
            raise ValueError("read_timeout_sec must exceed operation_timeout_sec")
        return v

    @property
    def port(self) -> int:
        return self.port_https if self.transport == "https" else self.port_http

    def endpoint(self, hostname: str) -> str:
        return f"{self.transport}://{hostname}:{self.port}/wsman"


class EnforcementSettings(BaseModel):
    """
    Settings for a NetBIOS enforcement run.

    Loaded from ``config/enforcement_config.json``; every field has a default
    so an absent file is valid.
    """

    max_concurrency: int = Field(
        default=10,
        description="Maximum number of hosts processed at the same time",
        ge=1,
        le=50,
    )
    host_prefix: Optional[str] = Field(
        default=None,
        description="Override for the discovery name prefix (default: first 4 chars of the domain)",
    )
    event_log: str = Field(default="System", description="Event log receiving audit entries")
    event_source: str = Field(default="AutoNetbios", description="Event source tag")
    event_id: int = Field(default=555, ge=0, le=65535, description="Audit event code")
    dry_run: bool = Field(default=False, description="Report changes without writing")
    winrm: WinRMSettings = Field(default_factory=WinRMSettings)
    credentials: Optional[Credential] = Field(default=None, description="WinRM credentials")

    @field_validator("max_concurrency")
    @classmethod
    def warn_high_concurrency(cls, v: int) -> int:
        if v > 20:
            logger.warning("max_concurrency of %s is high - consider WinRM quotas on targets", v)
        return v

    @field_validator("host_prefix")
    @classmethod
    def validate_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v
