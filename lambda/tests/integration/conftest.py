"""
Fixtures compartilhadas para testes de integração
Container real (cache em memória + fakes dos ports externos) atrás do handler Lambda
"""
import pytest
from typing import Any, Dict, Optional

from infrastructure.adapters.input import lambda_handler as handler_module
from infrastructure.bootstrap import build_container, shutdown_container, start_container
from shared.config.settings import Settings


class MockContext:
    """Mock do Lambda Context para testes locais"""
    def __init__(self):
        self.function_name = 'weather-lookup-api'
        self.function_version = '$LATEST'
        self.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:weather-lookup-api'
        self.memory_limit_in_mb = '512'
        self.aws_request_id = 'test-request-id-12345'
        self.log_group_name = '/aws/lambda/weather-lookup-api'
        self.log_stream_name = '2025/11/18/[$LATEST]test'

    def get_remaining_time_in_millis(self):
        return 30000  # 30 segundos


@pytest.fixture
def mock_context():
    """Fixture que retorna MockContext para todos os testes"""
    return MockContext()


def build_api_gateway_event(
    method: str,
    path: str,
    query_parameters: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Builder genérico para eventos do API Gateway (REST, proxy)

    Args:
        method: HTTP method (GET, OPTIONS)
        path: Request path (/api/weather)
        query_parameters: Query string params dict
        headers: Headers extras
    """
    return {
        'resource': path,
        'path': path,
        'httpMethod': method,
        'headers': {
            'Accept': 'application/json',
            **(headers or {})
        },
        'multiValueHeaders': {},
        'pathParameters': None,
        'queryStringParameters': query_parameters,
        'multiValueQueryStringParameters': (
            {k: [v] for k, v in query_parameters.items()} if query_parameters else None
        ),
        'body': None,
        'isBase64Encoded': False,
        'requestContext': {
            'stage': 'test',
            'requestId': 'test-request-id-12345',
            'httpMethod': method,
            'path': path,
            'resourcePath': path,
            'identity': {'sourceIp': '127.0.0.1'}
        }
    }


def build_weather_event(query: Optional[str]) -> Dict[str, Any]:
    """Builder para evento GET /api/weather?q=London"""
    return build_api_gateway_event('GET', '/api/weather', {'q': query} if query is not None else None)


def build_search_event(query: Optional[str]) -> Dict[str, Any]:
    """Builder para evento GET /api/search?q=Lon"""
    return build_api_gateway_event('GET', '/api/search', {'q': query} if query is not None else None)


@pytest.fixture
def settings() -> Settings:
    return Settings(cache_ttl_seconds=300, request_timeout_seconds=2.0)


@pytest.fixture
def serve_app(fake_remote, fake_provider, clock):
    """
    Factory: inicia um container e o registra no handler Lambda

    Usage:
        def test_something(serve_app):
            container = serve_app(Settings(request_timeout_seconds=0.1))
    """
    started = []

    def _serve(app_settings: Settings, weather_provider=None):
        app_container = build_container(
            app_settings,
            remote_client=fake_remote,
            weather_provider=weather_provider or fake_provider,
            clock=clock
        )
        start_container(app_container)
        handler_module.init_app(app_container)
        started.append(app_container)
        return app_container

    yield _serve

    for app_container in started:
        shutdown_container(app_container)
    handler_module._container = None
    handler_module._app = None


@pytest.fixture
def container(serve_app, settings):
    """Container iniciado com configuração padrão de teste"""
    return serve_app(settings)
