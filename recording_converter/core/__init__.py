"""
Core domain layer: models, ports, services and use cases for recording conversion.
"""
