"""
Unit tests for the Table QA Service.

Test individual components in isolation:
- Table and Answer models (invariants, wire form)
- TableLoader (CSV parsing, row policy, error line numbers)
- Response decoding and the Hugging Face connector (stubbed transport)
- Service façade, API dependencies and logging configuration
"""
