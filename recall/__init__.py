"""
Recall - spaced-repetition review scheduling.

Subpackages:
- recall.fsrs: memory model, review state machine, scheduling preview
- recall.session_builders: study queue and session records
- recall.analytics: daily / aggregate statistics and workload forecast
"""
