"""
Operational scripts (console entry points).
"""
