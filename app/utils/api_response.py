from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel
from starlette.responses import JSONResponse

Serializable = Union[
    BaseModel,
    List[BaseModel],
    Any,
]


def serialize_api_response_data(data: Optional[Serializable]) -> Any:
    """
    Serializes API response data into primitive types for JSONResponse compatibility.

    This utility currently supports:
    - Single Pydantic BaseModel instance → converted via `.model_dump(mode="json")`
    - List of Pydantic BaseModel instances → each converted via `.model_dump(mode="json")`
    - Dicts → values serialized recursively

    Any other type is returned as-is and assumed to be JSON-serializable.
    """

    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list) and all(isinstance(item, BaseModel) for item in data):
        data = [item.model_dump(mode="json") for item in data]
    elif isinstance(data, dict):
        return {key: serialize_api_response_data(value) for key, value in data.items()}

    return data


class APIResponse:
    """Utility class for standardized API responses."""

    @staticmethod
    def success(
        message: str, data: Optional[Serializable] = None, status_code: int = 200
    ) -> JSONResponse:
        """Generate a success response."""
        response = {"success": True, "message": message, "status_code": status_code}

        if data is not None:
            response["data"] = serialize_api_response_data(data)

        return JSONResponse(content=response, status_code=status_code)

    @staticmethod
    def error(
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400,
        debug: Optional[Any] = None,
        error_type: Optional[str] = None,
    ) -> JSONResponse:
        """Generate an error response."""
        response = {
            "success": False,
            "message": message,
            "status_code": status_code,
            "error_type": error_type,
        }

        if debug is not None:
            response["debug"] = debug

        if details is not None:
            response["details"] = details

        return JSONResponse(content=response, status_code=status_code)
