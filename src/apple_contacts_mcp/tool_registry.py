from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.tool import Tool
from apple_contacts_mcp.tools.get_all_contacts_tool import GetAllContactsTool
from apple_contacts_mcp.tools.get_contact_by_name_tool import GetContactByNameTool
from apple_contacts_mcp.tools.search_contacts_tool import SearchContactsTool


@dataclass(frozen=True)
class ToolGroup:
    enabled: Callable[[dict], bool]
    build: Callable[[dict], list[Tool]]


def _always(_: dict) -> bool:
    return True


def _lookup_tools(ctx: dict) -> list[Tool]:
    service = ctx["service"]
    return [
        SearchContactsTool(service),
        GetContactByNameTool(service),
        GetAllContactsTool(service),
    ]


def _diagnostics_enabled(ctx: dict) -> bool:
    return bool(ctx.get("diagnostics_enabled"))


def _diagnostic_tools(ctx: dict) -> list[Tool]:
    service = ctx["service"]

    from apple_contacts_mcp.tools.check_permissions_tool import CheckPermissionsTool
    from apple_contacts_mcp.tools.contact_processing_tool import ContactProcessingDiagnosticTool
    from apple_contacts_mcp.tools.get_contact_count_tool import GetContactCountTool
    from apple_contacts_mcp.tools.get_contact_names_tool import GetContactNamesTool

    return [
        CheckPermissionsTool(service),
        ContactProcessingDiagnosticTool(service),
        GetContactCountTool(service),
        GetContactNamesTool(service),
    ]


_GROUPS = [
    ToolGroup(enabled=_always, build=_lookup_tools),
    ToolGroup(enabled=_diagnostics_enabled, build=_diagnostic_tools),
]


def get_all(service: ContactsService, diagnostics_enabled: bool = True) -> list[Tool]:
    ctx = {
        "service": service,
        "diagnostics_enabled": diagnostics_enabled,
    }

    tools: list[Tool] = []
    for group in _GROUPS:
        if group.enabled(ctx):
            tools.extend(group.build(ctx))
    return tools
