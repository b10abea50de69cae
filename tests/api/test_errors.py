"""
测试错误处理
"""

import pytest
from fastapi.testclient import TestClient

from filehub.api.errors import (
    Messages,
    ValidationException,
    FileReadException,
    StorageException,
)
from filehub.api.main import create_app


class TestExceptions:
    """测试异常的状态码与文本"""

    def test_validation_is_400(self):
        exc = ValidationException(Messages.FILENAME_REQUIRED)
        assert exc.status_code == 400
        assert exc.message == "Filename is required"

    def test_read_failure_is_400(self):
        exc = FileReadException()
        assert exc.status_code == 400
        assert exc.message == "File not found"

    def test_storage_failure_is_500(self):
        exc = StorageException()
        assert exc.status_code == 500
        assert exc.message == "Internal Server Error"


class TestGlobalExceptionHandler:
    """未预期的异常返回纯文本 500，服务继续运行"""

    @pytest.fixture
    def client(self, app_config):
        app = create_app(app_config)

        @app.get("/boom")
        def boom():
            raise RuntimeError("unexpected")

        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

    def test_unhandled_exception(self, client):
        response = client.get("/boom")
        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_server_keeps_serving(self, client):
        client.get("/boom")
        assert client.get("/getFiles").status_code == 200
