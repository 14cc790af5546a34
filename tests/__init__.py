"""
Test suite for Gift Card Intake.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_csv_parser.py -v
"""
