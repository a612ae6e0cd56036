"""
Additional API endpoints for Cloud Pipe
Contains health checks and function calling status
"""

import logging
from datetime import datetime, timezone

from . import __version__
from .app_factory import Components

logger = logging.getLogger(__name__)


async def function_calling_status_handler(components: Components):
    """Get status of function calling implementation"""
    specs = components.catalog.list()
    return {
        "function_calling": True,
        "functions_available": len(specs),
        "functions": [spec.name for spec in specs],
        "status": "operational" if specs else "no_functions"
    }


async def functions_list_handler(components: Components):
    """List the function declarations offered to the model"""
    return {"functions": components.catalog.to_wire()}


async def health_check_handler(components: Components):
    """Health check endpoint with component status"""
    return {
        "status": "healthy",
        "service": "cloud-pipe",
        "version": __version__,
        "chat_endpoint": components.transport.url,
        "image_generation": {
            "enabled": components.image_client is not None
        },
        "checked_at": datetime.now(timezone.utc).isoformat()
    }
