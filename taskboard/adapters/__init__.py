"""
Storage adapters implementing TaskRepositoryPort.
"""
