"""Snapshot job builder — turns a RunnerConfig into Percy YAML documents."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import yaml

from src.catalog import PAGE_PATHS, build_urls
from src.models.config import RunnerConfig
from src.models.snapshot import (
    CombinedDocument,
    DiscoveryConfig,
    ExecuteHooks,
    GlobalConfig,
    SnapshotDefaults,
    SnapshotDescriptor,
)
from src.page_scripts import WAIT_FOR_ASSETS_SCRIPT

logger = logging.getLogger(__name__)

MODE_COMBINED = "combined"
MODE_SPLIT = "split"
OUTPUT_MODES = (MODE_COMBINED, MODE_SPLIT)

COMBINED_FILE = "urls.yml"
SNAPSHOTS_FILE = "snapshots.yml"
CONFIG_FILE = "percy-config.yml"

DEFAULT_WIDTHS = [1920, 414]
DEFAULT_BROWSERS = ["chrome", "safari"]
WAIT_FOR_TIMEOUT_MS = 5000
USER_AGENT = "PercyBot/1.0"

# Content of these differs between captures.
HIDDEN_SELECTORS = [
    "iframe",
    ".cy-featured-posts",
    ".cy-customers-archive",
    ".cy-sticky-post",
    "#onetrust-consent-sdk",
    "#INDWrap",
    "#chat-widget",
    ".cy-animation-bar__progress-value",
    ".cy-animation-number__value",
]


def build_hide_css(selectors: Sequence[str] = HIDDEN_SELECTORS) -> str:
    return f"{', '.join(selectors)} {{ display: none !important; }}"


PERCY_CSS = build_hide_css()


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_BlockDumper.add_representer(str, _represent_str)


def dump_yaml(data: object) -> str:
    """Serialize to YAML, keeping key order and one line per plain scalar."""
    return yaml.dump(
        data,
        Dumper=_BlockDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )


@dataclass
class SnapshotJob:
    """Everything one Percy run needs: the descriptors and the files to write."""

    mode: str
    urls: list[str]
    snapshots: list[SnapshotDescriptor]
    documents: dict[str, object] = field(default_factory=dict)  # filename -> plain data

    @property
    def snapshot_file(self) -> str:
        return COMBINED_FILE if self.mode == MODE_COMBINED else SNAPSHOTS_FILE

    @property
    def config_file(self) -> str | None:
        return CONFIG_FILE if self.mode == MODE_SPLIT else None

    def render(self) -> dict[str, str]:
        """Return filename -> YAML text for every document of the job."""
        return {name: dump_yaml(data) for name, data in self.documents.items()}


class SnapshotJobBuilder:
    """Assembles the snapshot specification for one run.

    The same builder covers both document shapes: ``combined`` puts every
    setting on each snapshot entry in a single file, ``split`` keeps per-page
    fields in a snapshot list and moves shared defaults into a Percy config.
    """

    def __init__(
        self,
        config: RunnerConfig,
        mode: str = MODE_COMBINED,
        paths: Sequence[str] = PAGE_PATHS,
        wait_script: str = WAIT_FOR_ASSETS_SCRIPT,
    ):
        if mode not in OUTPUT_MODES:
            raise ValueError(f"Unknown output mode '{mode}', expected one of {OUTPUT_MODES}")
        self.config = config
        self.mode = mode
        self.paths = paths
        self.wait_script = wait_script

    def build(self) -> SnapshotJob:
        urls = build_urls(self.config.base_url, self.paths)
        snapshots = [self._descriptor(url) for url in urls]
        logger.debug("Built %d snapshot descriptors (%s mode)", len(snapshots), self.mode)

        job = SnapshotJob(mode=self.mode, urls=urls, snapshots=snapshots)

        if self.mode == MODE_COMBINED:
            job.documents[COMBINED_FILE] = CombinedDocument(snapshots=snapshots).model_dump(
                by_alias=True, exclude_none=True
            )
        else:
            job.documents[SNAPSHOTS_FILE] = [
                s.model_dump(by_alias=True, exclude_none=True) for s in snapshots
            ]
            job.documents[CONFIG_FILE] = self._global_config().model_dump(
                by_alias=True, exclude_none=True
            )
        return job

    def _descriptor(self, url: str) -> SnapshotDescriptor:
        descriptor = SnapshotDescriptor(
            name=url,
            url=url,
            percy_css=PERCY_CSS,
            wait_for_timeout=WAIT_FOR_TIMEOUT_MS,
            execute=ExecuteHooks(before_snapshot=self.wait_script),
        )
        if self.mode == MODE_COMBINED:
            descriptor.widths = list(DEFAULT_WIDTHS)
            descriptor.browsers = list(DEFAULT_BROWSERS)
            descriptor.request_headers = {"User-Agent": USER_AGENT}
        return descriptor

    def _global_config(self) -> GlobalConfig:
        return GlobalConfig(
            snapshot=SnapshotDefaults(
                widths=list(DEFAULT_WIDTHS),
                browsers=list(DEFAULT_BROWSERS),
            ),
            discovery=DiscoveryConfig(
                network_idle_timeout=self.config.network_idle_timeout,
                user_agent=USER_AGENT,
            ),
        )
