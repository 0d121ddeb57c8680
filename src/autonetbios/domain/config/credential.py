"""
Credential domain model.

Holds the WinRM username/password pair used for remote hosts.
"""

from pydantic import BaseModel, Field, SecretStr, field_validator


class Credential(BaseModel):
    """Domain model for OS credentials."""

    username: str = Field(..., description="Account name, DOMAIN\\user or user@domain")
    password: SecretStr = Field(..., description="Account password")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not empty."""
        if not v or not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()

    def get_password(self) -> str:
        """Get the plain text password."""
        return self.password.get_secret_value()  # pylint: disable=no-member
