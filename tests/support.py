import base64
import io
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from werkzeug.datastructures import FileStorage


TEST_CONFIG = {
    "TESTING": True,
    "JWT_SECRET_KEY": "test-secret",
    "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
    "LOG_LEVEL": "WARNING",
    "MEDIA_LOCAL_FALLBACK_ENABLED": False,
}


class FakeMinio:
    def __init__(self):
        self.objects = {}

    def clear(self):
        self.objects.clear()

    def bucket_exists(self, *args, **kwargs):
        return True

    def make_bucket(self, *args, **kwargs):
        return None

    def put_object(self, **kwargs):
        self.objects[kwargs["object_name"]] = kwargs["content_type"]

    def remove_object(self, bucket_name, object_name):
        self.objects.pop(object_name, None)


def image_upload(filename="me.png", content_type="image/png"):
    return FileStorage(
        stream=io.BytesIO(b"fake-image-bytes"),
        filename=filename,
        content_type=content_type,
    )


def forge_subject(token, subject="999"):
    """Rewrite the payload of a signed token while keeping its signature."""
    header, payload, signature = token.split(".")
    claims = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    claims["sub"] = subject
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return f"{header}.{forged}.{signature}"


class AppTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from blogsite import create_app
        from blogsite.db import db

        cls.app = create_app({
            **TEST_CONFIG,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
        })
        cls.db = db

        cls.fake_minio = FakeMinio()
        cls.minio_patch = patch(
            "blogsite.services.media_service.get_minio_client",
            return_value=cls.fake_minio,
        )
        cls.minio_patch.start()

    @classmethod
    def tearDownClass(cls):
        cls.minio_patch.stop()
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()
        self.fake_minio.clear()
        self.client = self.app.test_client()

    def _register(self, username, password="pass123"):
        from blogsite.services import auth_service

        with self.app.app_context():
            user = auth_service.register(
                f"{username.title()} Example",
                f"{username}@example.com",
                username,
                password,
                image_upload(),
            )
            return user.id

    def _token_for(self, user_id):
        from blogsite.services.token_service import issue_token

        with self.app.app_context():
            return issue_token(user_id)

    def _login(self, username, password="pass123"):
        response = self.client.post(
            "/login",
            data={"username": username, "password": password},
        )
        self.assertEqual(response.status_code, 302)
        return response

    def _create_post(self, user_id, title="Hello", content="World"):
        from blogsite.services import post_service

        with self.app.app_context():
            return post_service.create_post(user_id, title, content).id

    def assertRedirectsTo(self, response, path):
        self.assertEqual(response.status_code, 302)
        self.assertTrue(
            response.headers["Location"].endswith(path),
            response.headers["Location"],
        )
