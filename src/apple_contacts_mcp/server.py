from __future__ import annotations

import json
from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from apple_contacts_mcp.tool import Tool

SERVER_NAME = "contacts-server"

REMEDIATION_HINT = (
    "💡 Try using the 'check_permissions' tool first to diagnose permission issues. "
    "You may need to grant Contacts and Automation permissions to your MCP client "
    "or Terminal in System Settings."
)


def text_result(text: str) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=text)]


def error_result(message: str) -> list[types.TextContent]:
    return text_result(f"Error accessing contacts: {message}\n\n{REMEDIATION_HINT}")


class ContactsMcpServer:
    """Dispatches MCP tool calls to Tool objects and wraps every outcome as text content."""

    def __init__(self, tools: list[Tool], name: str = SERVER_NAME):
        self._tools = {tool.name: tool for tool in tools}
        self._name = name

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
            for tool in self._tools.values()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        tool_input = arguments or {}
        logger.debug("Tool call: {name} | input: {input}", name=name, input=json.dumps(tool_input, default=str))

        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name!r}")
            return error_result(f"Unknown tool: {name}")

        try:
            output = await tool.execute(tool_input)
        except Exception as ex:
            logger.error(f"{name} error: {ex}")
            return error_result(str(ex))

        logger.debug("Tool result: {name} | chars={chars}", name=name, chars=len(output))
        return text_result(output)

    def build(self) -> Server:
        server: Server = Server(self._name)

        @server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        @server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

        return server

    async def run_stdio(self) -> None:
        server = self.build()
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"Contacts MCP server started on stdio with {len(self._tools)} tools")
            await server.run(read_stream, write_stream, server.create_initialization_options())
