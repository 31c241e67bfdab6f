"""Application Layer - use cases, ports e serviços"""
