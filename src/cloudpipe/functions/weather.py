"""
Built-in weather lookup function
"""

import asyncio
import logging
from typing import Dict, Any

from pydantic import BaseModel, Field

from .base import FunctionHandler

logger = logging.getLogger(__name__)


class GetWeatherArguments(BaseModel):
    city: str = Field(..., description="Name of the city")


class GetWeatherFunction(FunctionHandler):
    """Simulated weather lookup for a city"""

    name = "GetWeather"
    description = "Get the weather for a city"
    arguments_model = GetWeatherArguments

    def __init__(self, latency: float = 0.5):
        self.latency = latency

    async def run(self, arguments: GetWeatherArguments) -> Dict[str, Any]:
        logger.info(f"Simulating weather lookup for city: {arguments.city}")

        # Stands in for a real weather service call
        await asyncio.sleep(self.latency)

        return {
            "temperature": "34°C",
            "condition": "Sunny",
            "city": arguments.city
        }
