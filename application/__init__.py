"""
Application Layer for workout planner sync.

This package contains:
- ports/: Protocols for the remote workout service (what the use cases need)
- use_cases/: Export, upload and weekly-plan workflows
- exceptions.py: Client errors shared with the infrastructure adapters
"""
