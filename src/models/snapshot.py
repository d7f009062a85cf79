"""Percy snapshot document data structures."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExecuteHooks(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    before_snapshot: str = Field(alias="beforeSnapshot")  # page-side JS, opaque


class SnapshotDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str  # same as url
    url: str
    widths: Optional[list[int]] = None
    percy_css: str = Field(default="", alias="percyCSS")
    browsers: Optional[list[str]] = None
    wait_for_timeout: int = Field(default=5000, alias="waitForTimeout")  # ms
    request_headers: Optional[dict[str, str]] = Field(default=None, alias="requestHeaders")
    execute: Optional[ExecuteHooks] = None


class CombinedDocument(BaseModel):
    """Single-file shape: every setting lives on the snapshot entries."""

    version: int = 1
    snapshots: list[SnapshotDescriptor] = Field(default_factory=list)


class SnapshotDefaults(BaseModel):
    widths: list[int] = Field(default_factory=list)
    browsers: list[str] = Field(default_factory=list)


class DiscoveryConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    network_idle_timeout: int = Field(alias="network-idle-timeout")  # ms
    user_agent: Optional[str] = Field(default=None, alias="user-agent")


class GlobalConfig(BaseModel):
    """Percy config file used alongside a bare snapshot list."""

    version: int = 2
    snapshot: SnapshotDefaults = Field(default_factory=SnapshotDefaults)
    discovery: DiscoveryConfig
