"""
Core analysis lifecycle logic: stage machine, progress estimation, scoring,
report aggregation, and job tracking.
"""
