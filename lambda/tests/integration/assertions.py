"""
Helpers de assertions para testes de integração
"""
import json
from typing import Any, Dict


def response_body(response: Dict[str, Any]) -> Any:
    """Corpo JSON decodificado da resposta Lambda"""
    body = response.get('body')
    return json.loads(body) if isinstance(body, str) else body


def content_type_of(response: Dict[str, Any]):
    # AWS Powertools pode retornar headers ou multiValueHeaders
    if 'multiValueHeaders' in response and 'Content-Type' in response['multiValueHeaders']:
        return response['multiValueHeaders']['Content-Type'][0]
    return response.get('headers', {}).get('Content-Type')


def assert_200_ok(response: Dict[str, Any], expected_content_type: str = 'application/json'):
    """
    Valida resposta 200 OK

    Raises:
        AssertionError: Se a resposta não for 200 ou não tiver estrutura correta
    """
    assert response['statusCode'] == 200, f"Expected 200, got {response['statusCode']}: {response.get('body')}"
    assert 'body' in response, "Response should have body"

    content_type = content_type_of(response)
    assert content_type == expected_content_type, \
        f"Content-Type should be {expected_content_type}, got {content_type}"


def assert_error(response: Dict[str, Any], status_code: int, message: str):
    """
    Valida resposta de erro {"message": ...}

    Args:
        response: Lambda response dict
        status_code: Status HTTP esperado
        message: Mensagem esperada
    """
    assert response['statusCode'] == status_code, \
        f"Expected {status_code}, got {response['statusCode']}: {response.get('body')}"
    assert response_body(response) == {'message': message}


def assert_cors_headers(response: Dict[str, Any], origin: str = '*'):
    headers = response.get('headers', {})
    assert headers.get('Access-Control-Allow-Origin') == origin
    assert 'GET' in headers.get('Access-Control-Allow-Methods', '')
