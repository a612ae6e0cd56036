"""
Function dispatcher
Runs the local function named by a function call intent and always yields a result payload
"""

import json
import logging
from typing import Any

from ..exceptions import DispatchError, FunctionNotFoundError
from .catalog import FunctionCatalog

logger = logging.getLogger(__name__)

# Neutral result sent back to the model when a function cannot produce one
EMPTY_RESULT = "{}"


class FunctionDispatcher:
    """
    Executes catalog functions on behalf of the orchestrator

    Unknown names, unparseable arguments and function failures all degrade to
    EMPTY_RESULT so the conversation can continue.
    """

    def __init__(self, catalog: FunctionCatalog):
        self.catalog = catalog

    async def invoke(self, name: str, raw_arguments: Any) -> str:
        """
        Execute a function call

        Args:
            name: Function name requested by the model
            raw_arguments: Raw argument payload from the model

        Returns:
            JSON text of the function result, or EMPTY_RESULT on any failure
        """
        try:
            handler = self.catalog.handler(name)
        except FunctionNotFoundError:
            logger.warning(f"Unknown function requested: {name}")
            return EMPTY_RESULT

        try:
            arguments = handler.parse(raw_arguments)
        except DispatchError as e:
            logger.error(f"Could not parse arguments for function {name}: {e}")
            return EMPTY_RESULT
        except Exception as e:
            # e.g. RecursionError on deeply nested JSON
            logger.error(f"Could not parse arguments for function {name}: {e!r}")
            return EMPTY_RESULT

        try:
            logger.info(f"Executing function call: {name}")
            result = await handler.run(arguments)
            payload = json.dumps(result, ensure_ascii=False, separators=(",", ":"))
        except Exception as e:
            logger.error(f"Error executing function {name}: {e}")
            return EMPTY_RESULT

        logger.info(f"Function call {name} completed successfully")
        return payload
