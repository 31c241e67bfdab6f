"""
Configuração centralizada de logging
Logger estruturado (JSON) do AWS Lambda Powertools, service name via DD_SERVICE
"""
import os
from typing import Optional

from aws_lambda_powertools import Logger

DEFAULT_SERVICE_NAME = 'weather-lookup'


def get_logger(service_name: Optional[str] = None, child: bool = False, level: Optional[str] = None) -> Logger:
    """
    Retorna uma instância configurada do Logger

    Child loggers compartilham handler e chaves anexadas (append_keys) com o
    logger principal do mesmo serviço, então logs de cache e provider herdam
    o contexto da requisição.

    Args:
        service_name: Nome do serviço (se None, usa DD_SERVICE do ambiente)
        child: Se True, cria um child logger
        level: Nível de log (se None, usa LOG_LEVEL ou INFO)
    """
    service_name = service_name or os.environ.get('DD_SERVICE', DEFAULT_SERVICE_NAME)

    if child:
        return Logger(service=service_name, child=True)

    return Logger(
        service=service_name,
        level=level or os.environ.get('LOG_LEVEL', 'INFO'),
    )


# Logger principal da aplicação
logger = get_logger()
