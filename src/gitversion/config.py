"""Configuration values for the gitversion package."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    version_tag_prefix: str = Field("v", description="Prefix of release tags (git-flow)")
    version_alpha_flag: str = Field(
        "alpha", description="Pre-release identifier for develop and feature builds"
    )
    version_rc_flag: str = Field(
        "rc", description="Pre-release identifier for release and hotfix builds"
    )
    version_rc_start_tag_prefix: str = Field(
        "rc-", description="Tags marking the start of a release branch"
    )

    rc_branch_prefix: str = Field("release", description="e.g. release/0.2")
    hotfix_branch_prefix: str = Field("hotfix", description="e.g. hotfix/2.0.3")
    master_branch: str = Field("master", description="Branch producing final releases")

    fallback_branch: str | None = Field(
        None, description="Branch name used when HEAD is detached (e.g. on CI)"
    )
    git_executable: str = Field("git", description="Git executable name or path")

    log_level: str = Field("INFO", description="Log level")

    sentry_dsn: str | None = Field(None, description="Sentry DSN, disabled when unset")
    sentry_environment: str = Field("production", description="Sentry environment")
    sentry_traces_sample_rate: float = Field(
        0.0, description="Sentry performance traces sample rate"
    )


settings = Settings()
