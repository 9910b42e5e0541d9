from typing import Literal

from pydantic import BaseModel, Field


class UpdaterConfig(BaseModel):
    # None means probe the filesystem for symlink support
    symlink_mode: bool | None = None
    retry: bool = True


class ScannerConfig(BaseModel):
    index_ttl: float = Field(default=5.0, gt=0)


class MirrorConfig(BaseModel):
    updater: UpdaterConfig = Field(default_factory=UpdaterConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
