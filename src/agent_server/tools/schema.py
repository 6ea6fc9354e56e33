"""Conversion of declared tool schemas to Ollama tool descriptors."""

from typing import Any

from agent_server.tools.types import ToolInfo


def convert_parameters(schema: Any) -> dict[str, Any]:
    """Convert a JSON-Schema-like object into Ollama function parameters.

    Only ``required`` and ``properties`` are carried over, and inside each
    property only ``type``, ``description`` and ``enum``. Fields missing from
    the source are left out. A schema that is not a dict yields an empty
    parameter set.

    Args:
        schema: The declared input schema of a tool

    Returns:
        dict: Parameters in the form {"type": "object", "required": [...],
              "properties": {...}}
    """
    parameters: dict[str, Any] = {"type": "object"}

    if not isinstance(schema, dict):
        return parameters

    required = schema.get("required")
    if isinstance(required, list):
        parameters["required"] = [r for r in required if isinstance(r, str)]

    properties = schema.get("properties")
    if isinstance(properties, dict):
        converted: dict[str, Any] = {}
        for prop_name, prop_value in properties.items():
            if not isinstance(prop_value, dict):
                continue

            prop: dict[str, Any] = {}
            if isinstance(prop_value.get("type"), str):
                prop["type"] = prop_value["type"]
            if isinstance(prop_value.get("description"), str):
                prop["description"] = prop_value["description"]
            if isinstance(prop_value.get("enum"), list):
                prop["enum"] = prop_value["enum"]

            converted[prop_name] = prop
        parameters["properties"] = converted

    return parameters


def tool_to_ollama(tool: ToolInfo) -> dict[str, Any]:
    """Build the Ollama function-calling descriptor for a tool.

    Args:
        tool: The registered tool

    Returns:
        dict: {"type": "function", "function": {"name", "description", "parameters"}}
    """
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": convert_parameters(tool.input_schema),
        },
    }
