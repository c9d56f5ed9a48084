"""
Decoding of the table-QA response body into an Answer.

Two hard-fail stages:
1. JSON parse: the body must be a JSON object
2. Typed validation: the object must fit the Answer model

Either stage failing raises DecodeError; no partial Answer is produced.
"""

import json

import structlog
from pydantic import ValidationError as PydanticValidationError

from table_qa.inference.exceptions import DecodeError
from table_qa.models.answer import Answer

logger = structlog.get_logger(__name__)


def parse_json_object(content: str | bytes) -> dict:
    """
    Parse response content into a dict.

    Raises:
        DecodeError: Empty content, invalid JSON, or a non-object JSON value
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(
                "Response body is not valid UTF-8",
                decode_errors=[str(e)],
            ) from e

    if not content or not content.strip():
        raise DecodeError("Response body is empty or whitespace-only", raw_content=content)

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Failed to parse response body as JSON: {e.msg}",
            raw_content=content,
            decode_errors=[f"{e.msg} at line {e.lineno} col {e.colno}"],
        ) from e

    if not isinstance(parsed, dict):
        raise DecodeError(
            f"Response body is not a JSON object (got {type(parsed).__name__})",
            raw_content=content,
        )

    return parsed


def decode_answer(content: str | bytes) -> Answer:
    """
    Decode a success response body into an Answer.

    Args:
        content: Raw response body

    Returns:
        Fully populated Answer

    Raises:
        DecodeError: If either decode stage fails
    """
    data = parse_json_object(content)

    try:
        answer = Answer.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        raise DecodeError(
            "Response body does not match the answer format",
            raw_content=json.dumps(data)[:500],
            decode_errors=errors,
        ) from e

    logger.debug(
        "Decoded answer",
        aggregator=answer.aggregator.value,
        cells_count=len(answer.cells),
    )
    return answer
