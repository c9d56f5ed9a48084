"""
Table-QA inference connectors.

Components:
- BaseInferenceConnector: Abstract base class for connectors
- HuggingFaceConnector: Hugging Face Inference API implementation
- decode_answer: Response body -> Answer
- exceptions: Connector failure taxonomy
"""

from table_qa.inference.base_connector import BaseInferenceConnector
from table_qa.inference.huggingface_connector import (
    DEFAULT_ENDPOINT_URL,
    HuggingFaceConnector,
)
from table_qa.inference.decoding import decode_answer
from table_qa.inference.exceptions import (
    DecodeError,
    InferenceError,
    InferenceTimeoutError,
    MissingCredentialError,
    RemoteServiceError,
    TransportError,
    outcome_of,
)

__all__ = [
    "BaseInferenceConnector",
    "HuggingFaceConnector",
    "DEFAULT_ENDPOINT_URL",
    "decode_answer",
    "InferenceError",
    "MissingCredentialError",
    "TransportError",
    "InferenceTimeoutError",
    "RemoteServiceError",
    "DecodeError",
    "outcome_of",
]
