"""
Unit Test Layer Configuration (Layer 4)

Structure:
    tests/unit/
    ├── inventory_service/     Models and input validation
    └── fulfillment_service/   Package sizing, state codes, carrier payloads

Usage:
    pytest tests/unit -v
    pytest tests/unit -m unit -v
"""
