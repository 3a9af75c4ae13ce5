import asyncio

from dotenv import load_dotenv
from loguru import logger

from apple_contacts_mcp.app_config import load_json_config, parse_app_config
from apple_contacts_mcp.contacts_service import ContactsService
from apple_contacts_mcp.logging_config import setup_logging
from apple_contacts_mcp.script_runner import ScriptRunner
from apple_contacts_mcp.server import ContactsMcpServer
from apple_contacts_mcp.tool_registry import get_all


async def main() -> None:
    load_dotenv()

    config = parse_app_config(load_json_config())

    log_descriptions = setup_logging(level=config.log_level, consumers=config.log_consumers)
    for description in log_descriptions:
        logger.debug(f"Logging to {description}")

    runner = ScriptRunner(
        interpreter=config.osascript_path,
        probe_timeout=config.probe_timeout_seconds,
        bulk_timeout=config.bulk_timeout_seconds,
    )
    service = ContactsService(runner, fetch_cap=config.fetch_cap)
    tools = get_all(service, diagnostics_enabled=config.diagnostics_enabled)

    server = ContactsMcpServer(tools, name=config.server_name)
    await server.run_stdio()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
