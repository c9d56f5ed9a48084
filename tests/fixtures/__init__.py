"""
Test fixtures for the Table QA Service.

Contains sample data for testing:
- sample_table.csv: Small people dataset (header + 4 rows)
- valid_answer.json: Successful table-QA response body for the Alice/Bob table
"""
