"""
Input Adapter: Lambda Handler HTTP (100% ASYNC)
Presentation Layer: gerencia requisições HTTP e delega para use cases
"""
import json
from typing import Optional

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, CORSConfig, Response, content_types
from aws_lambda_powertools.utilities.typing import LambdaContext

# Domain Layer - Exceptions
from domain.exceptions import InvalidQueryException, WeatherProviderException

# Infrastructure Layer - Adapters
from infrastructure.adapters.input.exception_handler_service import ExceptionHandlerService
from infrastructure.bootstrap import AppContainer, build_container, start_container

# Shared Layer - Utilities
from shared.config.logger_config import get_logger

# Configurar Logger com service name do DD_SERVICE
logger = get_logger()


def create_app(container: AppContainer) -> APIGatewayRestResolver:
    """
    Cria o resolver com rotas ligadas ao container informado

    Rotas:
    - GET /api/weather?q=London
    - GET /api/search?q=Lon
    - GET /health
    """
    settings = container.settings
    app = APIGatewayRestResolver(cors=CORSConfig(allow_origin=settings.cors_origin))

    # =============================
    # Exception Handlers (Delegados para ExceptionHandlerService)
    # =============================
    exception_service = ExceptionHandlerService(logger)

    app.exception_handler(InvalidQueryException)(exception_service.handle_invalid_query)
    app.exception_handler(WeatherProviderException)(exception_service.handle_weather_provider_error)
    app.exception_handler(TimeoutError)(exception_service.handle_timeout)
    app.exception_handler(Exception)(exception_service.handle_unexpected_error)

    def run_async(coro):
        # Timeout da requisição cancela a coroutine no event loop compartilhado
        return container.runner.run(coro, timeout=settings.request_timeout_seconds)

    # =============================
    # Routes
    # =============================

    @app.get("/api/weather")
    def get_weather_route():
        """
        GET /api/weather?q=London

        Retorna condições atuais + previsão de 1 dia.
        Em cache hit inclui cached=true e cachedAt (inserção original).
        """
        query = app.current_event.get_query_string_value(name="q", default_value="")
        return run_async(container.get_weather.execute(query))

    @app.get("/api/search")
    def search_cities_route():
        """GET /api/search?q=Lon - sugestões de cidades (mínimo 2 caracteres)"""
        query = app.current_event.get_query_string_value(name="q", default_value="")
        suggestions = run_async(container.search_cities.execute(query))
        return Response(
            status_code=200,
            content_type=content_types.APPLICATION_JSON,
            body=json.dumps(suggestions)
        )

    @app.get("/health")
    def health_route():
        """Estado do cache: tier remoto, entradas locais e contadores"""
        return {
            'status': 'healthy',
            'service': settings.service_name,
            'cache': {
                'backend': settings.cache_backend,
                'remoteState': container.health_check.state.value,
                'localEntries': len(container.store),
                'sweeperRunning': container.sweeper.is_running,
                'stats': container.cache_service.stats.to_dict()
            }
        }

    return app


# =============================
# Lambda entry (container criado no cold start)
# =============================
_container: Optional[AppContainer] = None
_app: Optional[APIGatewayRestResolver] = None


def init_app(container: Optional[AppContainer] = None) -> APIGatewayRestResolver:
    """
    Inicializa container + resolver uma vez por processo

    Args:
        container: Container pronto (local_server/testes); padrão: build + start
    """
    global _container, _app

    if container is not None:
        _container = container
        _app = create_app(container)
    elif _app is None:
        _container = start_container(build_container())
        _app = create_app(_container)

    return _app


@logger.inject_lambda_context()
def lambda_handler(event, context: LambdaContext):
    """
    AWS Lambda main function

    AWS Lambda Powertools manages:
    - REST routing with exception handlers
    - CORS
    - JSON serialization
    - Structured logging
    """
    app = init_app()

    headers = event.get('headers', {}) or {}
    request_context = event.get('requestContext', {}) or {}
    identity = request_context.get('identity', {}) or {}

    logger.info(
        "Requisição recebida",
        rota=event.get('path', 'N/A'),
        metodo=event.get('httpMethod', 'N/A'),
        request_id=getattr(context, 'aws_request_id', 'N/A'),
        source_ip=identity.get('sourceIp', 'N/A'),
        session_id=headers.get('x-session-id', 'N/A')
    )

    response = app.resolve(event, context)

    # Add CORS headers manually
    if 'headers' not in response:
        response['headers'] = {}

    response['headers']['Access-Control-Allow-Origin'] = _container.settings.cors_origin
    response['headers']['Access-Control-Allow-Headers'] = 'Content-Type,Authorization,X-Requested-With,X-Session-Id'
    response['headers']['Access-Control-Allow-Methods'] = 'GET,OPTIONS'
    response['headers']['Access-Control-Max-Age'] = '86400'

    status_code = response.get('statusCode', 'N/A')
    logger.info(
        "Requisição concluída",
        status_code=status_code,
        sucesso=status_code == 200
    )

    return response
