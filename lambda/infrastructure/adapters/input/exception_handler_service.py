"""
Exception Handler Service
Centraliza tratamento de exceções com logging estruturado
"""
import json
from aws_lambda_powertools.event_handler import Response

from domain.exceptions import InvalidQueryException, WeatherProviderException
from shared.config.logger_config import logger as app_logger


def _json_response(status_code: int, body: dict) -> Response:
    return Response(
        status_code=status_code,
        content_type="application/json",
        body=json.dumps(body)
    )


class ExceptionHandlerService:
    """
    Service para centralizar tratamento de exceções da aplicação
    Responsável por converter exceções em respostas HTTP apropriadas
    """
    logger = app_logger

    def __init__(self, logger=app_logger):
        # Permite injeção de logger compartilhado para manter contexto de correlação
        if logger:
            ExceptionHandlerService.logger = logger

    @staticmethod
    def handle_invalid_query(ex: InvalidQueryException) -> Response:
        """Handle 400 - Missing or short query"""
        ExceptionHandlerService.logger.warning("Invalid query", error=str(ex), details=ex.details)
        return _json_response(400, {"message": ex.message})

    @staticmethod
    def handle_weather_provider_error(ex: WeatherProviderException) -> Response:
        """Handle upstream errors - repassa o status da API de clima quando conhecido"""
        if ex.status_code and 400 <= ex.status_code < 600:
            ExceptionHandlerService.logger.warning(
                "Weather provider error",
                error=str(ex),
                status_code=ex.status_code,
                details=ex.details
            )
            return _json_response(ex.status_code, {"message": ex.message})

        ExceptionHandlerService.logger.error("Weather API error", error=str(ex), details=ex.details, exc_info=True)
        return _json_response(500, {"message": "Error fetching weather data"})

    @staticmethod
    def handle_timeout(ex: TimeoutError) -> Response:
        """Handle 504 - Request exceeded REQUEST_TIMEOUT_SECONDS"""
        ExceptionHandlerService.logger.error("Request timed out", error=str(ex))
        return _json_response(504, {"message": "Request timed out"})

    @staticmethod
    def handle_unexpected_error(ex: Exception) -> Response:
        """Handle 500 - Unexpected errors"""
        ExceptionHandlerService.logger.error("Unexpected error", error=str(ex), exc_info=True)
        return _json_response(500, {"message": "Error fetching weather data"})
