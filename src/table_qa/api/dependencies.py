"""
FastAPI dependency injection for the Table QA Service.

Provides singleton instances of expensive resources (the pooled inference
connector) and factory functions for the per-request service.
"""

from functools import lru_cache

from fastapi import Depends

from table_qa.config import Settings, settings
from table_qa.inference.base_connector import BaseInferenceConnector
from table_qa.inference.huggingface_connector import HuggingFaceConnector
from table_qa.loader.csv_loader import TableLoader
from table_qa.service import TableQAService


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_connector() -> BaseInferenceConnector:
    """
    Get singleton inference connector with connection pooling.

    Uses @lru_cache to ensure only one connector instance is created.
    The connector keeps an internal httpx connection pool.

    Returns:
        HuggingFaceConnector instance
    """
    current = get_settings()
    return HuggingFaceConnector(
        endpoint_url=current.HF_INFERENCE_URL,
        timeout=current.INFERENCE_TIMEOUT,
    )


@lru_cache()
def get_table_loader() -> TableLoader:
    """
    Get singleton table loader.

    The loader only holds its delimiter, so sharing it is safe.
    """
    return TableLoader(delimiter=get_settings().CSV_DELIMITER)


def get_service(
    loader: TableLoader = Depends(get_table_loader),
    connector: BaseInferenceConnector = Depends(get_connector),
) -> TableQAService:
    """
    Create the table QA service with injected dependencies.

    Note: TableQAService is NOT cached because it's lightweight and stateless.
    Its loader and connector are singletons.
    """
    return TableQAService(loader=loader, connector=connector)
