"""
Integration coverage audit.

Compares the apps the catalog (or a UI app-config source file) declares
against the apps an execution runtime supports, and reports the ones
with no runtime support. Stateless; reads plain files only.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

MISSING_PREVIEW_LIMIT = 60

# `export const slackConfig: AppConfig = {` followed by `id: 'slack'` on the next line
APP_CONFIG_ID_PATTERN = re.compile(r": AppConfig\s*=\s*\{[^\S\r\n]*\r?\n\s*id\s*:\s*'([^']+)'")
# `appId === 'slack'` comparisons in a runner dispatch
RUNNER_APP_ID_PATTERN = re.compile(r"appId\s*===\s*['\"]([^'\"]+)['\"]")

SOURCE_SUFFIXES = {".ts", ".tsx", ".js", ".cjs", ".mjs"}
YAML_SUFFIXES = {".yaml", ".yml"}


def unique(items: Iterable[str]) -> list[str]:
    """De-duplicate, keeping first-seen order."""
    return list(dict.fromkeys(items))


def extract_app_config_ids(source: str) -> list[str]:
    """App ids declared as AppConfig objects, in order of appearance."""
    return unique(APP_CONFIG_ID_PATTERN.findall(source))


def extract_runner_app_ids(source: str) -> list[str]:
    """App ids a runner dispatches on."""
    return unique(RUNNER_APP_ID_PATTERN.findall(source))


def load_supported_ids(path: Path) -> list[str]:
    """
    Read the supported-app list.

    Accepts a runner source file (scraped for ``appId === '...'``), a YAML
    file holding a list or a ``supported:`` list, or plain text with one
    id per line (``#`` starts a comment).
    """
    text = path.read_text(encoding="utf-8")

    if path.suffix in SOURCE_SUFFIXES:
        return extract_runner_app_ids(text)

    if path.suffix in YAML_SUFFIXES:
        data = yaml.safe_load(text) or []
        if isinstance(data, dict):
            data = data.get("supported", [])
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a list of app ids")
        return unique(str(item) for item in data)

    ids = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            ids.append(line)
    return unique(ids)


def load_declared_ids(path: Path) -> list[str]:
    """Read declared app ids from an AppConfig source file."""
    return extract_app_config_ids(path.read_text(encoding="utf-8"))


@dataclass
class CoverageReport:
    """Declared apps versus runtime-supported apps."""
    apps: int
    supported: int
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apps": self.apps,
            "supported": self.supported,
            "missing": len(self.missing),
            "missing_first_60": self.missing[:MISSING_PREVIEW_LIMIT],
        }


def audit_coverage(app_ids: Iterable[str], supported_ids: Iterable[str]) -> CoverageReport:
    """
    Find declared apps the runtime does not support.

    Args:
        app_ids: Declared app ids, in display order
        supported_ids: App ids with runtime support

    Returns:
        CoverageReport; ``missing`` keeps the declared order
    """
    declared = unique(app_ids)
    supported = set(supported_ids)
    missing = [app_id for app_id in declared if app_id not in supported]

    logger.debug(f"Coverage audit: {len(declared)} apps, {len(supported)} supported, {len(missing)} missing")
    return CoverageReport(apps=len(declared), supported=len(supported), missing=missing)
