"""State layer.

Holds the uploaded records, the latest live positions and the per-asset
transition memory. Each store is written by exactly one party and
publishes immutable snapshots, so readers always see one whole cycle.
"""
