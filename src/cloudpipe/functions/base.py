"""
Local function handlers callable by the chat model
Each handler owns a typed argument model; its JSON schema becomes the declared parameters
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Any, Type

from pydantic import BaseModel, ValidationError

from ..exceptions import DispatchError
from ..models import FunctionSpec

logger = logging.getLogger(__name__)


class SchemaConverter:
    """
    Converts pydantic JSON schemas to the function parameter format expected by the chat endpoint
    """

    @staticmethod
    def convert_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert an object JSON schema to function parameters format

        Args:
            schema: JSON schema produced by pydantic

        Returns:
            Dict with type, properties and required keys only
        """
        if not schema or schema.get("type") != "object":
            return {"type": "object", "properties": {}}

        properties = schema.get("properties", {})
        required = schema.get("required", [])

        converted = {}
        for prop_name, prop_def in properties.items():
            converted[prop_name] = SchemaConverter._convert_property(prop_def)

        result = {
            "type": "object",
            "properties": converted
        }

        if required:
            result["required"] = list(required)

        return result

    @staticmethod
    def _convert_property(prop_def: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a single property, dropping pydantic-only keys such as title"""
        prop_type = prop_def.get("type", "string")

        prop = {"type": prop_type}
        if prop_def.get("description"):
            prop["description"] = prop_def["description"]

        for key in ("default", "enum", "minimum", "maximum", "minLength", "maxLength", "pattern"):
            if key in prop_def:
                prop[key] = prop_def[key]

        if prop_type == "array" and "items" in prop_def:
            prop["items"] = SchemaConverter._convert_property(prop_def["items"])

        return prop


class FunctionHandler(ABC):
    """
    A local function the model may ask to run

    Subclasses set name, description and arguments_model and implement run().
    """

    name: str = ""
    description: str = ""
    arguments_model: Type[BaseModel] = BaseModel

    @property
    def spec(self) -> FunctionSpec:
        """Declaration offered to the model"""
        return FunctionSpec(
            name=self.name,
            description=self.description,
            parameters=SchemaConverter.convert_schema(self.arguments_model.model_json_schema())
        )

    def parse(self, raw_arguments: Any) -> BaseModel:
        """
        Parse the raw argument payload sent by the model

        Args:
            raw_arguments: JSON string or already-decoded mapping

        Returns:
            Validated arguments_model instance

        Raises:
            DispatchError: If the payload is not a JSON object matching the schema
        """
        if isinstance(raw_arguments, (str, bytes)):
            try:
                raw_arguments = json.loads(raw_arguments or "{}")
            except json.JSONDecodeError as e:
                raise DispatchError(f"Invalid JSON in arguments for '{self.name}': {e}") from e

        if not isinstance(raw_arguments, dict):
            raise DispatchError(f"Arguments for '{self.name}' are not a JSON object")

        try:
            return self.arguments_model.model_validate(raw_arguments)
        except ValidationError as e:
            raise DispatchError(f"Arguments for '{self.name}' failed validation: {e}") from e

    @abstractmethod
    async def run(self, arguments: BaseModel) -> Dict[str, Any]:
        """Execute the function and return a JSON-serialisable result"""
