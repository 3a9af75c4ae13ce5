from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from apple_contacts_mcp.contacts_service import DEFAULT_FETCH_CAP
from apple_contacts_mcp.script_runner import DEFAULT_BULK_TIMEOUT, DEFAULT_PROBE_TIMEOUT
from apple_contacts_mcp.server import SERVER_NAME
from apple_contacts_mcp.tools.tool_input import to_bool


@dataclass
class AppConfig:
    server_name: str
    osascript_path: str
    probe_timeout_seconds: float
    bulk_timeout_seconds: float
    fetch_cap: int
    diagnostics_enabled: bool
    log_level: str
    log_consumers: list | None


def load_json_config(path: Path | None = None) -> dict:
    config_path = path or Path.cwd() / "config.json"
    if config_path.exists():
        with open(config_path) as f:
            return json.load(f)
    return {}


def parse_app_config(config: dict) -> AppConfig:
    return AppConfig(
        server_name=config.get("ServerName", SERVER_NAME),
        osascript_path=os.environ.get("CONTACTS_MCP_OSASCRIPT") or config.get("OsascriptPath", "osascript"),
        probe_timeout_seconds=float(config.get("ProbeTimeoutSeconds", DEFAULT_PROBE_TIMEOUT)),
        bulk_timeout_seconds=float(config.get("BulkTimeoutSeconds", DEFAULT_BULK_TIMEOUT)),
        fetch_cap=max(1, int(config.get("FetchCap", DEFAULT_FETCH_CAP))),
        diagnostics_enabled=to_bool(config.get("EnableDiagnosticTools", True), default=True),
        log_level=os.environ.get("CONTACTS_MCP_LOG_LEVEL") or config.get("LogLevel", "INFO"),
        log_consumers=config.get("LogConsumers"),
    )
