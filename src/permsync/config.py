"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from permsync.domain.object_layout import PERMISSION_SETS_PREFIX
from permsync.domain.value_objects import ProvisioningMode


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Deployment
    provisioning_mode: ProvisioningMode = Field(
        description="Ingestion strategy, 'api' or 'event' (case-insensitive)",
    )
    environment: str = Field(default="dev", description="Environment name, prefixes resource names")

    # Tables
    permission_set_table: str = Field(default="", description="Metadata Store table name")
    permission_set_arn_table: str = Field(default="", description="Reference Store table name")
    links_table: str = Field(default="", description="Links table name (external)")
    links_permission_set_index: str = Field(
        default="permissionSetName",
        description="Links table index keyed by permission set name",
    )

    # Object store and notifications
    artefacts_bucket: str = Field(default="", description="Bucket holding permission_sets/ objects")
    error_notifications_topic_arn: str = Field(default="", description="SNS topic for operator notifications")

    # Access grants and keys
    permission_set_caller_role_arn: str = Field(
        default="",
        description="Principal granted access to the permission set path (event mode)",
    )
    ddb_tables_key_arn: str = Field(default="", description="KMS key encrypting both tables")
    logs_key_arn: str = Field(default="", description="KMS key encrypting logs and notifications")

    # Application
    aws_region: str = Field(default="us-east-1", description="AWS region")
    cors_origins: str = Field(default="*", description="Comma-separated allowed origins")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("provisioning_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _default_table_names(self) -> "Settings":
        if not self.permission_set_table:
            self.permission_set_table = f"{self.environment}-permissionSetTable"
        if not self.permission_set_arn_table:
            self.permission_set_arn_table = f"{self.environment}-permissionSetArnTable"
        if not self.links_table:
            self.links_table = f"{self.environment}-linksTable"
        return self

    @property
    def permission_sets_location(self) -> str:
        """Exported object store location of permission set files."""
        return f"s3://{self.artefacts_bucket}/{PERMISSION_SETS_PREFIX}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
