import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from apple_contacts_mcp.logging_config import ConsoleLogConsumer, FileLogConsumer, setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        setup_logging(level="INFO")

    def test_default_is_console_only(self) -> None:
        self.assertEqual(["console (stderr, INFO)"], setup_logging())

    def test_unknown_consumer_is_skipped(self) -> None:
        descriptions = setup_logging(consumers=[{"type": "syslog"}, {"type": "console", "level": "DEBUG"}])
        self.assertEqual(["console (stderr, DEBUG)"], descriptions)

    def test_file_consumer_creates_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "server.log"
            descriptions = setup_logging(consumers=[{"type": "file", "path": str(log_path)}])

            self.assertTrue(log_path.parent.is_dir())
            self.assertEqual([f"file ({log_path}, INFO)"], descriptions)
            setup_logging(consumers=[])

    def test_file_consumer_expands_home(self) -> None:
        with patch.dict("os.environ", {"HOME": "/tmp/home"}):
            consumer = FileLogConsumer(path="~/x.log")
        self.assertEqual("file (/tmp/home/x.log, INFO)", consumer.describe("INFO"))

    def test_console_describe(self) -> None:
        self.assertEqual("console (stderr, WARNING)", ConsoleLogConsumer().describe("WARNING"))


if __name__ == "__main__":
    unittest.main()
