"""
Application factory for Cloud Pipe
Handles component initialization and lifecycle management
"""

import logging
from typing import Dict, Any, NamedTuple, Optional

import httpx

from .chat import ChatHandler, ChatOrchestrator, ChatCompletionClient
from .functions import FunctionCatalog, FunctionDispatcher, build_default_catalog
from .images import ImageGenerationClient
from .transport import ChatTransport

logger = logging.getLogger(__name__)


class Components(NamedTuple):
    transport: ChatTransport
    catalog: FunctionCatalog
    orchestrator: ChatOrchestrator
    chat_handler: ChatHandler
    image_client: Optional[ImageGenerationClient]


async def initialize_components(
    config: Dict[str, Any],
    http_client: Optional[httpx.AsyncClient] = None
) -> Components:
    """
    Initialize all application components

    Args:
        config: Configuration from load_configuration()
        http_client: Optional shared HTTP client (otherwise each client creates its own)

    Returns:
        Components bundle
    """
    logger.info("Starting Cloud Pipe Service...")
    logger.info(f"Chat endpoint: {config['chat_url']}")

    catalog = build_default_catalog(weather_latency=config["weather_latency"])
    logger.info(f"Function catalog: {[spec.name for spec in catalog.list()]}")

    transport = ChatTransport(
        config["chat_url"],
        config["api_key"],
        timeout=config["request_timeout"],
        client=http_client
    )

    orchestrator = ChatOrchestrator(transport, catalog, FunctionDispatcher(catalog))
    completion_client = ChatCompletionClient(transport, default_temperature=config["chat_temperature"])
    chat_handler = ChatHandler(orchestrator, completion_client)

    image_client = None
    if config.get("image_url"):
        logger.info(f"Image endpoint: {config['image_url']}")
        image_client = ImageGenerationClient(config["image_url"], config["api_key"], client=http_client)
    else:
        logger.warning("AZURE_OPENAI_IMAGE_URL not set; image generation disabled")

    logger.info("✅ Cloud Pipe Service started successfully")

    return Components(transport, catalog, orchestrator, chat_handler, image_client)


async def cleanup_components(components: Components):
    """Cleanup all application components"""
    logger.info("Shutting down Cloud Pipe Service...")

    try:
        await components.transport.close()
    except Exception as e:
        logger.error(f"Error closing chat transport: {e}")

    if components.image_client:
        try:
            await components.image_client.close()
        except Exception as e:
            logger.error(f"Error closing image client: {e}")
