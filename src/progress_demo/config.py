"""Configuration management for progress-demo."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from progress_demo.errors import WorkspaceNotFoundError


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PROGRESS_DEMO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Simulation
    time_scale: float = Field(default=1.0, ge=0, description="Multiplier applied to every nominal phase duration")
    seed: int | None = Field(default=None, description="Seed for cosmetic randomness")

    # Workspace
    workspace_path: Path | None = Field(default=None, description="Workspace directory path")
    scan_limit: int = Field(default=100, ge=1, description="Maximum files returned by one workspace scan")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "chat"] = Field(default="default", description="Log output profile")

    def resolve_workspace(self) -> Path:
        return (self.workspace_path or Path.cwd()).expanduser().resolve()


def load_settings(workspace: Path | None = None, **overrides: object) -> Settings:
    """Load settings from environment and validate the workspace.

    Args:
        workspace: Optional workspace path override
        overrides: Explicit values that win over the environment

    Returns:
        Settings instance
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if workspace is not None:
        updates["workspace_path"] = workspace
    settings = Settings(**updates)

    resolved = settings.resolve_workspace()
    if not resolved.is_dir():
        raise WorkspaceNotFoundError(f"workspace not found: {resolved}")
    return settings.model_copy(update={"workspace_path": resolved})
