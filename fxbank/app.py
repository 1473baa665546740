"""
FXBank HTTP adapter (FastAPI)
- GET  /tools, POST /tools/{name}      tool metadata and invocation
- GET  /prompts, POST /prompts/{name}  prompt metadata and rendering
- GET  /health
"""

from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from pydantic import BaseModel, Field

from . import __version__, config
from .errors import UnknownPromptError, UnknownToolError
from .logging_config import get_logger, setup_logging
from .prompts.banking_prompts import BankingPrompts
from .services import BankingServices, create_services
from .tools.registry import ToolDispatcher

logger = get_logger("fxbank.app")


# -----------------------
# Request / Response models
# -----------------------

class ToolCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolCallResponse(BaseModel):
    tool: str
    result: Any


class PromptRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def create_app(services: Optional[BankingServices] = None) -> FastAPI:
    app = FastAPI(title="FXBank Tools", version=__version__)
    services = services or create_services()
    app.state.services = services
    app.state.tools = ToolDispatcher(services)
    app.state.prompts = BankingPrompts(services.store)

    @app.get("/tools")
    async def list_tools(request: Request):
        return {"tools": request.app.state.tools.list_tools()}

    @app.post("/tools/{name}", response_model=ToolCallResponse)
    async def call_tool(name: str, req: ToolCallRequest, request: Request):
        try:
            result = await request.app.state.tools.call(name, req.arguments)
        except UnknownToolError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return ToolCallResponse(tool=name, result=result)

    @app.get("/prompts")
    async def list_prompts(request: Request):
        return {"prompts": request.app.state.prompts.list_prompts()}

    @app.post("/prompts/{name}")
    async def render_prompt(name: str, req: PromptRequest, request: Request):
        try:
            return await request.app.state.prompts.render(name, req.arguments)
        except UnknownPromptError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    # -----------------------
    # Health
    # -----------------------
    @app.get("/health")
    async def health(request: Request):
        accounts = await request.app.state.services.store.list_accounts()
        return {"status": "healthy", "accounts": len(accounts)}

    return app


def main():
    setup_logging()
    app = create_app(create_services(seed_file=config.SEED_FILE))
    logger.info("Starting FXBank HTTP adapter on http://%s:%s", config.API_HOST, config.API_PORT)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
