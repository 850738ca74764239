"""
Test Suite for Boiler Cofiring Monitor

This module contains tests for:
- Telemetry generation (test_generator.py)
- Recommendation and operator fixtures (test_fixtures.py)
- KPI classification (test_kpi.py)
- Series statistics (test_statistics.py)
- Range-guard validation (test_validators.py)
- Operator console (test_operator.py)
- Demo login (test_auth.py)
- Dashboard component helpers (test_components.py)
- API endpoints (test_api.py)

Run tests with:
    pytest tests/ -v
    pytest tests/ --cov=core --cov=engine --cov=api
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
