"""
Function calling module for Cloud Pipe

This module provides the local side of function calling:
- Function handlers with typed argument models
- The function catalog offered to the chat model
- The dispatcher that runs requested functions
"""

from .base import FunctionHandler, SchemaConverter
from .catalog import FunctionCatalog
from .dispatcher import FunctionDispatcher, EMPTY_RESULT
from .weather import GetWeatherFunction, GetWeatherArguments


def build_default_catalog(weather_latency: float = 0.5) -> FunctionCatalog:
    """Catalog with the built-in functions"""
    return FunctionCatalog([GetWeatherFunction(latency=weather_latency)])


__all__ = [
    "FunctionHandler",
    "SchemaConverter",
    "FunctionCatalog",
    "FunctionDispatcher",
    "EMPTY_RESULT",
    "GetWeatherFunction",
    "GetWeatherArguments",
    "build_default_catalog",
]
