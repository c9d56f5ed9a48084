"""
Table Question Answering Service.

Answers natural-language questions about a CSV dataset by delegating the
reasoning to a remote table-QA model (TAPAS on the Hugging Face Inference API):
- TableLoader: CSV text -> column-oriented Table
- HuggingFaceConnector: Table + query -> structured Answer
- TableQAService: the two wired together for the HTTP layer

Architecture: FastAPI front end + Hugging Face inference + typed decoding
"""

__version__ = "0.1.0"
