"""Domain Layer - entidades, value objects e exceções do cache de clima"""
