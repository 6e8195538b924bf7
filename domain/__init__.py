"""
Domain layer for workout planner sync.

Pure models and converters for Garmin workouts. Nothing in this package
performs I/O; the network client and plan files live in infrastructure/.
"""
