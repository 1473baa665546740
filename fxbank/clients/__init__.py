from .tools_client import ToolsClient, ToolsClientError  # noqa: F401
