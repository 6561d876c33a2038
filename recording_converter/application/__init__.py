"""
Application layer: batch orchestration and dependency wiring.
"""
