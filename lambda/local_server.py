#!/usr/bin/env python3
"""
Servidor Local para Desenvolvimento
Simula AWS Lambda + API Gateway localmente usando Flask

Pré-requisitos:
    - Dependências instaladas: pip install -e ".[test]"
    - WEATHER_API_KEY exportada (REDIS_URL opcional; sem Redis usa cache em memória)

Como usar:
    cd lambda
    python local_server.py

Endpoints disponíveis:
    GET  http://localhost:3000/api/weather?q=London
    GET  http://localhost:3000/api/search?q=Lon
    GET  http://localhost:3000/health
"""
import atexit
import json
import os
import sys
from datetime import datetime

from flask import Flask, request, jsonify
from flask_cors import CORS

# Garantir que o diretório lambda está no path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from infrastructure.adapters.input.lambda_handler import init_app, lambda_handler
from infrastructure.bootstrap import build_container, shutdown_container, start_container
from shared.config.logger_config import get_logger

logger = get_logger(child=True)


class MockLambdaContext:
    """Mock do contexto Lambda para testes locais"""
    def __init__(self):
        self.aws_request_id = f"local-{datetime.now().timestamp()}"
        self.function_name = "local-weather-lookup"
        self.function_version = "$LATEST"
        self.invoked_function_arn = "arn:aws:lambda:local:000000000000:function:local-weather-lookup"
        self.memory_limit_in_mb = "512"
        self.log_group_name = "/aws/lambda/local-weather-lookup"
        self.log_stream_name = "local"

    def get_remaining_time_in_millis(self):
        return 300000  # 5 minutos


def flask_to_lambda_event(flask_request):
    """Converte requisição Flask para evento Lambda/API Gateway"""
    query_string_parameters = dict(flask_request.args.items())
    headers = dict(flask_request.headers.items())

    return {
        'resource': flask_request.path,
        'path': flask_request.path,
        'httpMethod': flask_request.method,
        'headers': headers,
        'queryStringParameters': query_string_parameters or None,
        'body': None,
        'isBase64Encoded': False,
        'requestContext': {
            'accountId': '000000000000',
            'apiId': 'local',
            'protocol': 'HTTP/1.1',
            'httpMethod': flask_request.method,
            'path': flask_request.path,
            'stage': 'local',
            'requestId': f"local-{datetime.now().timestamp()}",
            'requestTimeEpoch': int(datetime.now().timestamp() * 1000),
            'identity': {
                'sourceIp': flask_request.remote_addr,
                'userAgent': flask_request.headers.get('User-Agent', '')
            }
        }
    }


def lambda_to_flask_response(lambda_response):
    """Converte resposta Lambda para resposta Flask"""
    status_code = lambda_response.get('statusCode', 200)
    headers = lambda_response.get('headers', {})
    body = lambda_response.get('body', '')

    try:
        body_value = json.loads(body) if isinstance(body, str) else body
        return jsonify(body_value), status_code, headers
    except (json.JSONDecodeError, TypeError):
        return body, status_code, headers


def create_server(container=None) -> Flask:
    """
    Cria o app Flask ligado a um container já iniciado

    Args:
        container: Container pronto (padrão: build + start com variáveis de ambiente)
    """
    if container is None:
        container = start_container(build_container())
        atexit.register(shutdown_container, container)

    init_app(container)

    server = Flask(__name__)
    CORS(server, resources={r"/api/*": {"origins": container.settings.cors_origin}})

    def dispatch():
        if request.method == 'OPTIONS':
            return '', 200
        event = flask_to_lambda_event(request)
        response = lambda_handler(event, MockLambdaContext())
        return lambda_to_flask_response(response)

    server.add_url_rule('/api/weather', 'weather', dispatch, methods=['GET', 'OPTIONS'])
    server.add_url_rule('/api/search', 'search', dispatch, methods=['GET', 'OPTIONS'])
    server.add_url_rule('/health', 'health', dispatch, methods=['GET'])

    @server.errorhandler(404)
    def not_found(error):
        """Handler para rotas não encontradas"""
        return jsonify({
            'message': f"Route {request.path} not found",
            'available_routes': [
                'GET /api/weather?q={city}',
                'GET /api/search?q={prefix}',
                'GET /health'
            ]
        }), 404

    return server


if __name__ == '__main__':
    if not os.environ.get('WEATHER_API_KEY'):
        logger.warning("WEATHER_API_KEY not set; weather requests will fail upstream")

    port = int(os.environ.get('PORT', 3000))
    host = os.environ.get('HOST', '0.0.0.0')

    app = create_server()
    logger.info("Local server starting", url=f"http://{host}:{port}")

    # Reloader desativado: o container mantém event loop e conexões próprias
    app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)
