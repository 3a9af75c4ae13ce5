import asyncio
import sys
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from apple_contacts_mcp.applescripts import BULK_ITERATION_MARKER
from apple_contacts_mcp.errors import AutomationExecutionError, ScriptTimeoutError
from apple_contacts_mcp.script_runner import ScriptRunner

# Prints the -e argument back, standing in for osascript.
_ECHO_INTERPRETER = "sh -c 'printf \"%s\" \"$2\"' sh"


def _make_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.returncode = returncode
    return proc


class ScriptRunnerTests(unittest.TestCase):
    def test_timeout_policy(self) -> None:
        runner = ScriptRunner(probe_timeout=30, bulk_timeout=120)
        self.assertEqual(30, runner.timeout_for('tell application "Contacts" to return 1'))
        self.assertEqual(120, runner.timeout_for(f"tell x\n{BULK_ITERATION_MARKER}\nend repeat"))

    def test_build_command_quotes_payload_and_discards_stderr(self) -> None:
        runner = ScriptRunner()
        self.assertEqual(
            "osascript -e 'return \"it'\\''s\"' 2>/dev/null",
            runner.build_command('return "it\'s"'),
        )

    @patch("apple_contacts_mcp.script_runner.asyncio.create_subprocess_shell")
    def test_execute_returns_trimmed_stdout(self, mock_shell: AsyncMock) -> None:
        mock_shell.return_value = _make_process(b"Hello World\n\n")

        result = asyncio.run(ScriptRunner().execute('return "Hello World"'))

        self.assertEqual("Hello World", result)
        command = mock_shell.call_args.args[0]
        self.assertTrue(command.startswith("osascript -e "))
        self.assertTrue(command.endswith(" 2>/dev/null"))

    @patch("apple_contacts_mcp.script_runner.asyncio.create_subprocess_shell")
    def test_execute_keeps_trailing_tabs(self, mock_shell: AsyncMock) -> None:
        mock_shell.return_value = _make_process(b"Bob\t\t\t\t\t\tbob@x.com\t\r\n")

        result = asyncio.run(ScriptRunner().execute("return 1"))

        self.assertEqual("Bob\t\t\t\t\t\tbob@x.com\t", result)

    @patch("apple_contacts_mcp.script_runner.asyncio.create_subprocess_shell")
    def test_non_zero_exit_raises_with_exit_code_only(self, mock_shell: AsyncMock) -> None:
        mock_shell.return_value = _make_process(b"", b"execution error: secret detail (-1743)", returncode=1)

        with self.assertRaises(AutomationExecutionError) as ctx:
            asyncio.run(ScriptRunner().execute("return 1"))

        self.assertEqual(1, ctx.exception.exit_code)
        self.assertEqual("Failed to execute AppleScript (exit code: 1)", str(ctx.exception))
        self.assertNotIn("secret", str(ctx.exception))

    @patch("apple_contacts_mcp.script_runner.asyncio.create_subprocess_shell")
    def test_timeout_kills_process(self, mock_shell: AsyncMock) -> None:
        calls = {"count": 0}

        async def communicate():
            calls["count"] += 1
            if calls["count"] == 1:
                await asyncio.sleep(10)
            return b"", b""

        proc = MagicMock()
        proc.communicate = communicate
        proc.returncode = -9
        mock_shell.return_value = proc

        runner = ScriptRunner(probe_timeout=0.05)
        with self.assertRaises(ScriptTimeoutError) as ctx:
            asyncio.run(runner.execute("return 1"))

        proc.kill.assert_called_once()
        self.assertIsInstance(ctx.exception, AutomationExecutionError)
        self.assertIn("timed out after 0.05s", str(ctx.exception))

    @patch("apple_contacts_mcp.script_runner.asyncio.create_subprocess_shell")
    def test_timeout_when_process_already_exited(self, mock_shell: AsyncMock) -> None:
        calls = {"count": 0}

        async def communicate():
            calls["count"] += 1
            if calls["count"] == 1:
                await asyncio.sleep(10)
            return b"", b""

        proc = MagicMock()
        proc.communicate = communicate
        proc.kill.side_effect = ProcessLookupError()
        proc.returncode = 0
        mock_shell.return_value = proc

        runner = ScriptRunner(probe_timeout=0.05)
        with self.assertRaises(ScriptTimeoutError):
            asyncio.run(runner.execute("return 1"))

        proc.kill.assert_called_once()
        self.assertEqual(2, calls["count"])


@unittest.skipIf(sys.platform == "win32", "needs a POSIX shell")
class ScriptRunnerShellTests(unittest.TestCase):
    def test_single_quote_reaches_interpreter_intact(self) -> None:
        runner = ScriptRunner(interpreter=_ECHO_INTERPRETER)
        script = 'tell application "Contacts" to return "O\'Brien\'s \'quoted\'"'

        result = asyncio.run(runner.execute(script))

        self.assertEqual(script, result)

    def test_interpreter_exit_code_is_surfaced(self) -> None:
        runner = ScriptRunner(interpreter="sh -c 'echo partial output; exit 3' sh")

        with self.assertRaises(AutomationExecutionError) as ctx:
            asyncio.run(runner.execute("return 1"))

        self.assertEqual(3, ctx.exception.exit_code)
        self.assertNotIn("partial", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
