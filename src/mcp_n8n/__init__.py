"""
n8n MCP Server - canned n8n node and workflow tools over MCP.

This package implements the MCP protocol (JSON-RPC 2.0 over stdio or HTTP),
dispatches MCP methods, and answers tool calls from static in-memory tables
of n8n nodes, test workflows and workflow templates.
"""

__version__ = "2.7.20"
