"""
fxbank

Multi-currency transfer engine exposed as MCP tools:
- db/: in-memory account store, FX rate table, seed data
- transfer/: target resolution, pre-condition validation, execution
- nlu/: keyword intent classification + entity extraction
- guards/: elicitation, risk rules, pre-check policy engine
- tools/: tool metadata + dispatch for the direct and reasoning paths
- prompts/: LLM prompt templates over live account data
- mcp_server.py / app.py: FastMCP server and FastAPI adapter
- clients/: httpx client for the HTTP adapter
"""

__version__ = "1.0.0"
