import json
import base64
from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from safeshortener.types import LambdaEvent, LambdaContext
from safeshortener.lambdas.redirect_url import app
from safeshortener.models import RecordModel
from safeshortener.dao.base import RecordBaseDAO
from safeshortener.dao.exceptions import DataStoreError
from safeshortener.utils.config import ShortenerSettings


def basic(username: str, password: str) -> str:
    return 'Basic ' + base64.b64encode(f'{username}:{password}'.encode()).decode()


def redirect_event(shortcode: str | None = 'ab12cd34', authorization: str | None = None) -> LambdaEvent:
    event = {
        'resource': '/{shortcode}',
        'httpMethod': 'GET',
        'path': f'/{shortcode}',
        'pathParameters': {'shortcode': shortcode} if shortcode is not None else None,
        'headers': {},
    }
    if authorization is not None:
        event['headers']['Authorization'] = authorization
    return cast(LambdaEvent, event)


class TestRedirectUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'redirect_url'})

    @pytest.fixture
    def record_dao(self) -> RecordBaseDAO:
        dao = MagicMock(spec=RecordBaseDAO)
        dao.find_by_username.return_value = RecordModel(
            shortcode='ab12cd34',
            secret='xy98zw76',
            target='https://example.com/blog/chuck-norris-is-awesome',
            created_at=datetime.now(UTC),
        )
        return dao

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, record_dao: RecordBaseDAO) -> None:
        # Patch Lambda dependencies
        monkeypatch.setenv('APP_ENV', 'test')
        monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
        monkeypatch.setattr(app, 'load_settings', lambda: ShortenerSettings())
        monkeypatch.setattr(app, 'RecordRedisDAO', lambda *a, **kw: record_dao)

        self.context = context
        self.record_dao = record_dao

    def assert_unauthorized(self, response: dict, error_code: str) -> None:
        body = json.loads(response['body'])
        assert response['statusCode'] == 401
        assert response['headers']['WWW-Authenticate'] == 'Basic realm="safeshortener"'
        assert body['errorCode'] == error_code
        assert 'Location' not in response['headers']

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(redirect_event(authorization=basic('ab12cd34', 'xy98zw76')), self.context)

        assert response['statusCode'] == 302
        assert json.loads(response['body']) == {}
        assert response['headers']['Location'] == 'https://example.com/blog/chuck-norris-is-awesome'
        self.record_dao.find_by_username.assert_called_once_with('ab12cd34')

    @pytest.mark.parametrize('shortcode', [None, ''])
    def test_lambda_handler_with_missing_shortcode(self, shortcode) -> None:
        response = app.lambda_handler(redirect_event(shortcode=shortcode), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'shortcode' in path)"
        assert body['errorCode'] == 'MISSING_SHORTCODE'

    @pytest.mark.parametrize('authorization', [None, 'Bearer token', 'Basic !!!'])
    def test_lambda_handler_without_credentials(self, authorization) -> None:
        response = app.lambda_handler(redirect_event(authorization=authorization), self.context)

        self.assert_unauthorized(response, 'MISSING_CREDENTIALS')
        self.record_dao.find_by_username.assert_not_called()

    def test_lambda_handler_with_username_for_another_shortcode(self) -> None:
        response = app.lambda_handler(redirect_event(authorization=basic('zz99zz99', 'xy98zw76')), self.context)

        self.assert_unauthorized(response, 'INVALID_CREDENTIALS')
        self.record_dao.find_by_username.assert_not_called()

    def test_lambda_handler_with_wrong_secret(self) -> None:
        response = app.lambda_handler(redirect_event(authorization=basic('ab12cd34', 'wrong')), self.context)

        self.assert_unauthorized(response, 'INVALID_CREDENTIALS')

    def test_lambda_handler_with_unknown_shortcode(self) -> None:
        self.record_dao.find_by_username.return_value = None

        response = app.lambda_handler(redirect_event(authorization=basic('ab12cd34', 'xy98zw76')), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['errorCode'] == 'SHORT_URL_NOT_FOUND'
        assert body['message'] == "Not Found (short url 'ab12cd34' doesn't exist)"

    def test_lambda_handler_with_unreachable_data_store(self, monkeypatch: MonkeyPatch) -> None:
        def unreachable_dao(*args, **kwargs):
            raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")

        monkeypatch.setattr(app, 'RecordRedisDAO', unreachable_dao)

        response = app.lambda_handler(redirect_event(authorization=basic('ab12cd34', 'xy98zw76')), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['errorCode'] == 'DATA_STORE_FAILURE'

    def test_lambda_handler_with_data_store_error(self) -> None:
        self.record_dao.find_by_username.side_effect = DataStoreError('redis down')

        response = app.lambda_handler(redirect_event(authorization=basic('ab12cd34', 'xy98zw76')), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'DATA_STORE_FAILURE'
