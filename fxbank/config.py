"""
Runtime configuration for the FXBank tool servers.

Values are read from the environment (a local .env file is honoured).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("MCP_PORT", "9100"))
# "streamable-http" for the HTTP transport, "stdio" when launched by an MCP client
MCP_TRANSPORT = os.getenv("MCP_TRANSPORT", "streamable-http")

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "9200"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = Path(os.getenv("FXBANK_LOG_DIR", "logs"))

# Optional JSON file with "accounts" and "rates" arrays replacing the demo portfolio
SEED_FILE = os.getenv("FXBANK_SEED_FILE") or None

TOOLS_BASE_URL = os.getenv("FXBANK_TOOLS_BASE_URL", f"http://localhost:{API_PORT}")
REQUEST_TIMEOUT = float(os.getenv("FXBANK_REQUEST_TIMEOUT", "10"))
