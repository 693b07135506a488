"""FastAPI HTTP server for the Reminders Bridge.

Exposes the same three tools as the MCP server over plain HTTP, for
frontends and scripts that do not speak MCP. Every tool call answers with
the ToolResponse envelope; errors are reported in the body, not as HTTP
status codes.
"""

from typing import Any, Optional

from fastapi import Body, Depends, FastAPI

from config import settings
from logger_config import setup_logger
from schemas import ToolResponse
from tool_router import TOOLS, ToolRouter, build_router

logger = setup_logger(__name__, 'api.log')

app = FastAPI(
    title="Reminders Bridge API",
    description="Create and list native reminders through a uniform tool interface",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

_router: Optional[ToolRouter] = None


def get_router() -> ToolRouter:
    """Router dependency, built on first use from the global settings.

    Usage:
        @app.get("/endpoint")
        def endpoint(router: ToolRouter = Depends(get_router)):
            ...
    """
    global _router
    if _router is None:
        _router = build_router(settings)
    return _router


@app.get("/")
def root():
    """Root endpoint - service information"""
    return {
        "service": "Reminders Bridge API",
        "version": "1.0.0",
        "status": "healthy",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "tools": "/tools"
        }
    }


@app.get("/health")
def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "reminders_bridge",
        "test_mode": settings.TEST_MODE,
        "tools": [name.value for name in TOOLS]
    }


@app.get("/tools")
def list_tools(router: ToolRouter = Depends(get_router)):
    """Tool catalog with JSON input schemas."""
    return router.tool_definitions()


@app.post("/tools/{tool_name}", response_model=ToolResponse, response_model_by_alias=True)
async def call_tool(
    tool_name: str,
    arguments: Any = Body(None),
    router: ToolRouter = Depends(get_router)
):
    """Call a tool.

    Request body example for create_reminder:
    ```json
    {
        "title": "Buy milk",
        "dueDate": "2024-01-05 09:30:00",
        "list": "Groceries"
    }
    ```

    Always answers 200 with {payload, isError, message}, including when the
    body is not a JSON object.
    """
    logger.info(f"HTTP call: {tool_name}")
    return await router.dispatch(tool_name, arguments)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="info"
    )
