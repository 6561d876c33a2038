"""
Infrastructure layer: AWS client management and logging configuration.
"""
