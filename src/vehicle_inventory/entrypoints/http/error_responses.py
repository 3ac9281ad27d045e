"""REST API response envelope.

Every endpoint, successful or not, answers with the same body shape:
``{"message": ..., "data": ..., "errors": ...}``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_MESSAGE = "success"
ERROR_MESSAGE = "Errors found!"


class EnvelopeResponse(BaseModel):
    """Uniform response envelope.

    - ``message``: "success" or "Errors found!"
    - ``data``: operation payload (empty object on failure)
    - ``errors``: field-error map, field name -> ordered messages (empty object on success)

    Examples:
        Success:
            {"message": "success", "data": {"id": 538}, "errors": {}}

        Validation failure:
            {
                "message": "Errors found!",
                "data": {},
                "errors": {
                    "year": [
                        "This value should be of type digit.",
                    ],
                    "vin": ["This value is already used."]
                }
            }
    """

    message: str
    data: Any = Field(default_factory=dict)
    errors: dict[str, list[str]] = Field(default_factory=dict)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"message": "success", "data": {"id": 538}, "errors": {}},
                {
                    "message": "Errors found!",
                    "data": {},
                    "errors": {"id": ["No product found for id 538"]},
                },
                {
                    "message": "Errors found!",
                    "data": {},
                    "errors": {"data": ["No data sent to update."]},
                },
            ]
        }
    )


def success(data: Any = None) -> EnvelopeResponse:
    return EnvelopeResponse(message=SUCCESS_MESSAGE, data=data if data is not None else {})


def failure(errors: dict[str, list[str]]) -> EnvelopeResponse:
    return EnvelopeResponse(message=ERROR_MESSAGE, data={}, errors=errors)
