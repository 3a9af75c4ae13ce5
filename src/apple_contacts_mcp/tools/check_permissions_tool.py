from typing import Any

from apple_contacts_mcp.contacts_service import ContactsService

TROUBLESHOOTING_STEPS = """\
🔧 Troubleshooting steps:

1. Open System Settings → Privacy & Security
2. Look for "Contacts" in the list
3. Make sure the Terminal app (or your MCP client) is listed and checked
4. If not listed, try running the MCP server from Terminal first to trigger the permission prompt
5. You may also need to grant "Automation" permissions
6. Restart your MCP client after granting permissions

Note: On newer macOS versions, you might need to grant permissions to both the Terminal app and your MCP client separately."""


class CheckPermissionsTool:
    def __init__(self, service: ContactsService):
        self._service = service

    @property
    def name(self) -> str:
        return "check_permissions"

    @property
    def description(self) -> str:
        return (
            "Check if the required permissions are granted to access Contacts "
            "and provide troubleshooting information"
        )

    @property
    def is_mutating(self) -> bool:
        return False

    @property
    def input_schema(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}, "additionalProperties": False}

    async def execute(self, tool_input: dict[str, Any]) -> str:
        report = await self._service.diagnose()

        if not report.passed:
            return f"❌ Permissions check failed: {report.message}\n\n{TROUBLESHOOTING_STEPS}"

        return (
            "✅ Permissions check passed!\n\n"
            "System Events: Accessible\n"
            "Contacts app: Accessible\n"
            f"Contact count: {report.contact_count}\n\n"
            "The MCP server should be able to access your contacts. "
            "If you're still experiencing issues, try restarting your MCP client."
        )
