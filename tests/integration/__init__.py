"""
Integration tests for the Table QA Service.

Exercise the FastAPI app end to end (CSV file on disk -> /ask -> stubbed
inference endpoint) with FastAPI's TestClient.
"""
