"""
Lambda Function Handler - Weather Lookup
Delega para o adapter HTTP (container criado no cold start)
"""
from infrastructure.adapters.input.lambda_handler import lambda_handler

# Exportar lambda_handler para ser usado pela AWS Lambda
__all__ = ['lambda_handler']
