"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas de cache, provedores externos e adapters HTTP
"""
