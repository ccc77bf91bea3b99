import io
import os
import tempfile
import unittest


class FakeMinio:
    def __init__(self):
        self.buckets = set()
        self.policies = {}
        self.objects = {}

    def bucket_exists(self, bucket):
        return bucket in self.buckets

    def make_bucket(self, bucket):
        self.buckets.add(bucket)

    def set_bucket_policy(self, bucket, policy):
        self.policies[bucket] = policy

    def put_object(self, bucket_name, object_name, data, length, content_type, **kwargs):
        payload = data.read()
        assert len(payload) == length
        self.objects[(bucket_name, object_name)] = (payload, content_type)


class FailingMinio:
    def bucket_exists(self, *args, **kwargs):
        raise RuntimeError("storage down")

    def put_object(self, **kwargs):
        raise RuntimeError("storage down")


class RejectingMinio(FakeMinio):
    def __init__(self):
        super().__init__()
        self.buckets.add("media")
        self.put_attempts = 0

    def put_object(self, **kwargs):
        self.put_attempts += 1
        raise RuntimeError("access denied")


class AppTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from app import create_app
        from app.db import db

        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "test-secret",
            "PASSWORD_HASH_METHOD": "pbkdf2:sha256:1000",
            "MINIO_BUCKET": "media",
            "MINIO_PUBLIC_BASE_URL": "http://minio.test",
        })
        cls.db = db
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        from app.extensions import minio_client

        minio_client._ready_buckets.clear()
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()

    def _register(self, name="Alice", email="alice@example.com", password="pass123"):
        return self.client.post(
            "/api/auth/register",
            data={"name": name, "email": email, "password": password},
            content_type="multipart/form-data",
        )

    def _auth_header(self, email="alice@example.com", password="pass123"):
        response = self.client.post(
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        return {"Authorization": f"Bearer {response.get_json()['token']}"}


def media_file(payload=b"fake-image-bytes", filename="pic.jpg", mimetype="image/jpeg"):
    return (io.BytesIO(payload), filename, mimetype)
