"""
Configuration management for Cloud Pipe
Handles configuration loading from environment variables and middleware setup
"""

import os
import uuid
import logging
from typing import Dict, Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_configuration() -> Dict[str, Any]:
    """Load and validate configuration from the environment (and .env, if present)"""
    load_dotenv()

    chat_url = os.getenv("AZURE_OPENAI_CHAT_URL")
    api_key = os.getenv("AZURE_OPENAI_API_KEY")

    if not chat_url:
        raise ValueError("AZURE_OPENAI_CHAT_URL environment variable is required")
    if not api_key:
        raise ValueError("AZURE_OPENAI_API_KEY environment variable is required")

    config = {
        "chat_url": chat_url,
        "api_key": api_key,
        "image_url": os.getenv("AZURE_OPENAI_IMAGE_URL") or None,
        "request_timeout": float(os.getenv("REQUEST_TIMEOUT", "30")),
        "chat_temperature": float(os.getenv("CHAT_TEMPERATURE", "0.0")),
        "weather_latency": float(os.getenv("WEATHER_LATENCY", "0.5")),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "port": int(os.getenv("PORT", "8003")),
        "cors_origins": os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000").split(",")
    }

    logger.info(f"Loaded configuration for chat endpoint {chat_url}")
    return config


def setup_middleware(app, config: Dict[str, Any]):
    """Setup middleware for the FastAPI app"""
    from fastapi.middleware.cors import CORSMiddleware
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.requests import Request as StarletteRequest

    class DistributedTracingMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: StarletteRequest, call_next):
            trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
            request.state.trace_id = trace_id

            logger.info(f"[TRACE:{trace_id}] Cloud Pipe request: {request.method} {request.url.path}")

            response = await call_next(request)
            response.headers["X-Trace-ID"] = trace_id

            logger.info(f"[TRACE:{trace_id}] Cloud Pipe response: {response.status_code}")

            return response

    app.add_middleware(DistributedTracingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors_origins"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Trace-ID"],
    )
