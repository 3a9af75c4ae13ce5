import asyncio
import unittest
from unittest.mock import AsyncMock

from apple_contacts_mcp.errors import AutomationExecutionError, BridgeUnavailableError
from apple_contacts_mcp.permissions import PermissionReport
from apple_contacts_mcp.tools.check_permissions_tool import CheckPermissionsTool
from apple_contacts_mcp.tools.contact_processing_tool import ContactProcessingDiagnosticTool
from apple_contacts_mcp.tools.get_contact_count_tool import GetContactCountTool
from apple_contacts_mcp.tools.get_contact_names_tool import GetContactNamesTool


class TestGetContactCountTool(unittest.TestCase):
    def setUp(self) -> None:
        self.service = AsyncMock()
        self.tool = GetContactCountTool(self.service)

    def test_count(self) -> None:
        self.service.count.return_value = 123

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Total contacts in address book: 123", result)

    def test_failed_probe_returns_failure_text(self) -> None:
        self.service.count.side_effect = BridgeUnavailableError()

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Failed to get contact count: System Events not accessible", result)


class TestGetContactNamesTool(unittest.TestCase):
    def setUp(self) -> None:
        self.service = AsyncMock()
        self.service.first_names.return_value = ["Ann", "Ben"]
        self.tool = GetContactNamesTool(self.service)

    def test_default_limit(self) -> None:
        result = asyncio.run(self.tool.execute({}))

        self.service.first_names.assert_awaited_once_with(5)
        self.assertIn("First 2 contact names:\n\n1. Ann\n2. Ben", result)

    def test_limit_is_clamped(self) -> None:
        asyncio.run(self.tool.execute({"limit": 500}))
        asyncio.run(self.tool.execute({"limit": 0}))

        self.assertEqual([(20,), (1,)], [c.args for c in self.service.first_names.await_args_list])

    def test_failure_text(self) -> None:
        self.service.first_names.side_effect = AutomationExecutionError(1)

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Failed to get contact names: Failed to execute AppleScript (exit code: 1)", result)


class TestCheckPermissionsTool(unittest.TestCase):
    def setUp(self) -> None:
        self.service = AsyncMock()
        self.tool = CheckPermissionsTool(self.service)

    def test_pass_report(self) -> None:
        self.service.diagnose.return_value = PermissionReport(passed=True, message="ok", contact_count="42")

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Permissions check passed", result)
        self.assertIn("Contact count: 42", result)

    def test_fail_report_includes_remediation(self) -> None:
        self.service.diagnose.return_value = PermissionReport(passed=False, message="System Events not accessible")

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Permissions check failed: System Events not accessible", result)
        self.assertIn("Troubleshooting steps", result)
        self.assertIn("Automation", result)


class TestContactProcessingDiagnosticTool(unittest.TestCase):
    def setUp(self) -> None:
        self.service = AsyncMock()
        self.tool = ContactProcessingDiagnosticTool(self.service)

    def test_name(self) -> None:
        self.assertEqual("test_contact_processing", self.tool.name)

    def test_report(self) -> None:
        self.service.processing_report.return_value = [
            "Contact 1: Ann (emails:1, phones:0, time:0s)",
            "Contact 2: ERROR - bad",
        ]

        result = asyncio.run(self.tool.execute({"sample_size": 2}))

        self.service.processing_report.assert_awaited_once_with(2)
        self.assertIn("Contact 2: ERROR - bad", result)
        self.assertIn("for 2 contacts", result)

    def test_failure_text(self) -> None:
        self.service.processing_report.side_effect = AutomationExecutionError(1)

        result = asyncio.run(self.tool.execute({}))

        self.assertIn("Contact processing test failed", result)
        self.service.processing_report.assert_awaited_once_with(5)


if __name__ == "__main__":
    unittest.main()
