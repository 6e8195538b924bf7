"""
Infrastructure Layer for workout planner sync.

This package contains concrete implementations behind the application
ports:
- garmin/: Garmin Connect client and the in-memory mock client
- plan_files.py: reading and writing plan files (JSON or YAML)
"""
