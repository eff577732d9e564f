"""
Voxboard Backend - Test Configuration (conftest.py)
====================================================

What:  Shared fixtures: an in-memory database, in-memory fakes for the
       Google adapters, and an HTTP client bound to a fresh application.

Fixture Hierarchy (all function-scoped):
    ├── db_engine: aiosqlite :memory: engine with the full schema
    │   └── db_session: AsyncSession for service-level tests
    ├── fake_synthesizer / fake_blob_store / fake_text_generator
    └── app: create_app() with the fakes on app.state and the session
        dependency bound to db_engine
        └── test_client: httpx AsyncClient over ASGITransport
"""

import os

# Must run before any voxboard import reads the settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["GCP_BUCKET_NAME"] = "test-bucket"
os.environ["RETRY_MAX_ATTEMPTS"] = "2"
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict, List  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import voxboard.models  # noqa: E402,F401
from voxboard.database import Base, get_db_session  # noqa: E402
from voxboard.exceptions import GenerationError, StorageError, SynthesisError  # noqa: E402
from voxboard.services.feedback_service import FeedbackService  # noqa: E402
from voxboard.services.history_service import HistoryService  # noqa: E402
from voxboard.services.llm_base import TextGenerator  # noqa: E402
from voxboard.services.profile_service import ProfileService  # noqa: E402
from voxboard.services.report_service import ReportService  # noqa: E402
from voxboard.services.soundboard_service import SoundboardService  # noqa: E402
from voxboard.services.speech_service import SpeechSynthesizer  # noqa: E402
from voxboard.services.storage_service import BlobPresence, BlobStore  # noqa: E402

TEST_BUCKET = "test-bucket"
TEST_PUBLIC_BASE = "https://storage.googleapis.com"


# ══════════════════════════════════════════════════════════════════════════
# In-memory fakes for the Google adapters
# ══════════════════════════════════════════════════════════════════════════

class FakeSpeechSynthesizer(SpeechSynthesizer):
    def __init__(self):
        self.calls: List[str] = []
        self.fail = False

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if self.fail:
            raise SynthesisError(message="Error generating speech: quota exceeded")
        return b"ID3-fake-mp3:" + text.encode()


class FakeBlobStore(BlobStore):
    """Dict-backed store; failure switches per operation."""

    def __init__(self):
        super().__init__(TEST_BUCKET, TEST_PUBLIC_BASE)
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.upload_calls: List[str] = []
        self.exists_calls: List[str] = []
        self.delete_calls: List[str] = []
        self.fail_upload = False
        self.fail_exists = False
        self.fail_delete = False

    async def upload(self, data: bytes, key: str, content_type: str) -> str:
        self.upload_calls.append(key)
        if self.fail_upload:
            raise StorageError(message="Error uploading to Google Cloud Storage: 403")
        self.objects[key] = data
        self.content_types[key] = content_type
        return self.public_url(key)

    async def exists(self, key: str) -> BlobPresence:
        self.exists_calls.append(key)
        if self.fail_exists:
            return BlobPresence.UNKNOWN
        return BlobPresence.PRESENT if key in self.objects else BlobPresence.ABSENT

    async def delete(self, key: str) -> None:
        self.delete_calls.append(key)
        if self.fail_delete:
            raise StorageError(message="Failed to delete file: 503")
        self.objects.pop(key, None)


class FakeTextGenerator(TextGenerator):
    def __init__(self, reply: str = "Generated answer"):
        self.reply = reply
        self.topics: List[str] = []
        self.fail = False

    async def generate(self, topic: str) -> str:
        self.topics.append(topic)
        if self.fail:
            raise GenerationError(context={"error_type": "ResourceExhausted"})
        return self.reply


# ══════════════════════════════════════════════════════════════════════════
# Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same
    :memory: database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# Fakes
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_synthesizer() -> FakeSpeechSynthesizer:
    return FakeSpeechSynthesizer()


@pytest.fixture
def fake_blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def fake_text_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def sample_png_bytes() -> bytes:
    """PNG signature plus an IHDR header; enough for upload tests."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 17


# ══════════════════════════════════════════════════════════════════════════
# Application
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory, fake_synthesizer, fake_blob_store, fake_text_generator):
    """
    A fresh application with every external adapter replaced by a fake.

    The session override mirrors get_db_session: commit on success,
    rollback on error.
    """
    from voxboard.main import create_app

    application = create_app()
    application.state.synthesizer = fake_synthesizer
    application.state.blob_store = fake_blob_store
    application.state.text_generator = fake_text_generator
    application.state.soundboard_service = SoundboardService(fake_synthesizer, fake_blob_store)
    application.state.history_service = HistoryService()
    application.state.profile_service = ProfileService(fake_blob_store, max_picture_size=2048)
    application.state.feedback_service = FeedbackService()
    application.state.report_service = ReportService()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_db_session
    return application


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
