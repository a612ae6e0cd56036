"""
Cloud Pipe Service
Azure OpenAI chat completion with local function calling, plus image generation
"""

import os
import logging
from typing import Dict, Any, Optional
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

# Configure logging
logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
logger = logging.getLogger(__name__)

from . import __version__
from .app_factory import Components, initialize_components, cleanup_components
from .chat import (
    ChatRequest,
    ChatResponse,
    SingleCompletionRequest,
    MultiCompletionRequest,
    CompletionResponse,
)
from .config import load_configuration, setup_middleware
from .endpoints import (
    function_calling_status_handler,
    functions_list_handler,
    health_check_handler,
)
from .exceptions import ImageGenerationError


class ImageRequest(BaseModel):
    prompt: str


class ImageResponse(BaseModel):
    url: str


def get_components(request: Request) -> Components:
    return request.app.state.components


def create_app(
    config: Optional[Dict[str, Any]] = None,
    http_client: Optional[httpx.AsyncClient] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        config: Configuration dict (loaded from the environment when omitted)
        http_client: Optional shared HTTP client for all outbound calls

    Returns:
        Configured FastAPI app
    """
    app_config = config or load_configuration()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management"""
        app.state.components = await initialize_components(app_config, http_client)

        yield

        await cleanup_components(app.state.components)

    app = FastAPI(
        title="Cloud Pipe",
        description="Azure OpenAI chat completion with function calling",
        version=__version__,
        lifespan=lifespan
    )

    setup_middleware(app, app_config)

    @app.post("/chat", response_model=ChatResponse)
    async def chat(request: ChatRequest, components: Components = Depends(get_components)):
        """Chat with function calling"""
        return await components.chat_handler.handle_chat_request(request)

    @app.post("/chat/single", response_model=CompletionResponse)
    async def chat_single(request: SingleCompletionRequest, components: Components = Depends(get_components)):
        """Single-shot chat completion"""
        return await components.chat_handler.handle_single_request(request)

    @app.post("/chat/multi", response_model=CompletionResponse)
    async def chat_multi(request: MultiCompletionRequest, components: Components = Depends(get_components)):
        """Multi-turn chat completion"""
        return await components.chat_handler.handle_multi_request(request)

    @app.post("/images", response_model=ImageResponse)
    async def generate_image(request: ImageRequest, components: Components = Depends(get_components)):
        """Generate an image for a prompt"""
        if components.image_client is None:
            raise HTTPException(status_code=503, detail="Image generation is not configured")
        try:
            url = await components.image_client.generate_image(request.prompt)
        except ImageGenerationError as e:
            raise HTTPException(status_code=502, detail=str(e))
        return ImageResponse(url=url)

    @app.get("/functions")
    async def list_functions(components: Components = Depends(get_components)):
        """List functions the model may call"""
        return await functions_list_handler(components)

    # Health and Status Endpoints
    @app.get("/health")
    async def health_check(components: Components = Depends(get_components)):
        """Health check endpoint"""
        return await health_check_handler(components)

    @app.get("/function-calling/status")
    async def function_calling_status(components: Components = Depends(get_components)):
        """Get status of function calling implementation"""
        return await function_calling_status_handler(components)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8003)))
