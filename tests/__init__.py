"""
Centralized test suite for the Rural Producers API.

Test Organization:
- integration/ - API flows that cross several apps
- App-specific tests remain in their respective app directories (e.g., producers/tests.py)
"""
