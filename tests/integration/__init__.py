"""Integration tests for aws-region-lookup.

Integration tests make real HTTP requests to ip-ranges.amazonaws.com and
validate lookups against live data. They are skipped when there is no
internet connectivity and can be selected with: pytest -m integration
"""
