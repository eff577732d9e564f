"""
Voxboard Backend - Soundboard Service Tests
============================================

What:  SoundboardService against the in-memory database and fake adapters.

What we test:
    - Missing fields fail validation before any external call
    - audioUrl always ends with fileName
    - Upload failure becomes the generic creation error and writes no row
    - Insert failure is the same error and leaves the uploaded audio behind
    - Listing: not-found for zero rows, newest first, per-row file status
    - Deleting: 404 without a blob call, best-effort blob delete
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from voxboard.exceptions import NotFoundError, ValidationError, VoxboardError
from voxboard.models.soundboard import Soundboard
from voxboard.services.soundboard_service import SoundboardService

OWNER = "owner@example.com"


async def _count(db_session) -> int:
    return (await db_session.execute(select(func.count(Soundboard.id)))).scalar()


class TestCreateSoundboard:

    @pytest.fixture(autouse=True)
    def _service(self, fake_synthesizer, fake_blob_store):
        self.synth = fake_synthesizer
        self.store = fake_blob_store
        self.service = SoundboardService(fake_synthesizer, fake_blob_store)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,text,email",
        [
            ("", "Halo", OWNER),
            ("Greeting", "", OWNER),
            ("Greeting", "Halo", ""),
            (None, "Halo", OWNER),
            ("Greeting", "   ", OWNER),
        ],
    )
    async def test_missing_fields_make_no_external_calls(self, db_session, title, text, email):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(db_session, title=title, text=text, owner_email=email)

        assert exc_info.value.message == "Title, text, and email are required"
        assert self.synth.calls == []
        assert self.store.upload_calls == []
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_audio_url_ends_with_file_name(self, db_session):
        result = await self.service.create(
            db_session, title="Greeting", text="Selamat pagi", owner_email=OWNER
        )

        assert result.file_name.endswith(".mp3")
        assert result.audio_url.rsplit("/", 1)[-1] == result.file_name
        assert result.audio_url == f"https://storage.googleapis.com/test-bucket/{result.file_name}"
        assert self.synth.calls == ["Selamat pagi"]
        assert self.store.content_types[result.file_name] == "audio/mpeg"
        assert self.store.objects[result.file_name] == b"ID3-fake-mp3:Selamat pagi"

    @pytest.mark.asyncio
    async def test_row_is_persisted(self, db_session):
        result = await self.service.create(db_session, title="T", text="X", owner_email=OWNER)

        row = await db_session.get(Soundboard, result.id)
        assert row is not None
        assert row.created_by_email == OWNER
        assert row.file_name == result.file_name

    @pytest.mark.asyncio
    async def test_file_names_are_unique(self, db_session):
        first = await self.service.create(db_session, title="A", text="X", owner_email=OWNER)
        second = await self.service.create(db_session, title="B", text="X", owner_email=OWNER)
        assert first.file_name != second.file_name

    @pytest.mark.asyncio
    async def test_synthesis_failure_is_generic_creation_error(self, db_session):
        self.synth.fail = True

        with pytest.raises(VoxboardError) as exc_info:
            await self.service.create(db_session, title="T", text="X", owner_email=OWNER)

        assert exc_info.value.message == "Failed to create soundboard"
        assert exc_info.value.context["stage"] == "synthesis"
        assert self.store.upload_calls == []

    @pytest.mark.asyncio
    async def test_upload_failure_writes_no_row(self, db_session):
        self.store.fail_upload = True

        with pytest.raises(VoxboardError) as exc_info:
            await self.service.create(db_session, title="T", text="X", owner_email=OWNER)

        assert exc_info.value.message == "Failed to create soundboard"
        assert exc_info.value.context["stage"] == "upload"
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_insert_failure_leaves_uploaded_audio(self, db_session, monkeypatch):
        monkeypatch.setattr(
            db_session,
            "flush",
            AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("database is locked"))),
        )

        with pytest.raises(VoxboardError) as exc_info:
            await self.service.create(db_session, title="T", text="X", owner_email=OWNER)

        assert exc_info.value.message == "Failed to create soundboard"
        assert exc_info.value.context["stage"] == "persist"
        # Not compensated: the blob stays behind
        assert len(self.store.upload_calls) == 1
        assert self.store.upload_calls[0] in self.store.objects

    def test_timestamps_default_to_current_timestamp(self):
        columns = Soundboard.__table__.c
        assert str(columns.created_at.server_default.arg) == "CURRENT_TIMESTAMP"
        assert str(columns.updated_at.server_default.arg) == "CURRENT_TIMESTAMP"


class TestListSoundboards:

    @pytest.fixture(autouse=True)
    def _service(self, fake_synthesizer, fake_blob_store):
        self.store = fake_blob_store
        self.service = SoundboardService(fake_synthesizer, fake_blob_store)

    async def _insert(self, db_session, title, file_name, created_at, owner=OWNER):
        db_session.add(
            Soundboard(
                title=title,
                text="text",
                audio_url=self.store.public_url(file_name),
                file_name=file_name,
                created_by_email=owner,
                created_at=created_at,
                updated_at=created_at,
            )
        )
        await db_session.flush()

    @pytest.mark.asyncio
    async def test_zero_rows_is_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.list_by_owner(db_session, "nobody@example.com")

        assert exc_info.value.message == "No soundboards found for this email"

    @pytest.mark.asyncio
    async def test_newest_first_and_owner_filtered(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        await self._insert(db_session, "old", "a.mp3", base)
        await self._insert(db_session, "new", "b.mp3", base + timedelta(hours=1))
        await self._insert(db_session, "other", "c.mp3", base, owner="someone@example.com")

        items = await self.service.list_by_owner(db_session, OWNER)

        assert [item.title for item in items] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_file_status_per_row(self, db_session):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.store.objects["kept.mp3"] = b"audio"
        await self._insert(db_session, "kept", "kept.mp3", base + timedelta(minutes=1))
        await self._insert(db_session, "gone", "gone.mp3", base)

        items = await self.service.list_by_owner(db_session, OWNER)

        by_title = {item.title: item for item in items}
        assert by_title["kept"].file_exists is True
        assert by_title["kept"].file_status == "present"
        assert by_title["gone"].file_exists is False
        assert by_title["gone"].file_status == "absent"
        assert sorted(self.store.exists_calls) == ["gone.mp3", "kept.mp3"]

    @pytest.mark.asyncio
    async def test_failed_check_is_unknown_not_absent(self, db_session):
        self.store.objects["a.mp3"] = b"audio"
        self.store.fail_exists = True
        await self._insert(db_session, "a", "a.mp3", datetime(2024, 1, 1, tzinfo=timezone.utc))

        [item] = await self.service.list_by_owner(db_session, OWNER)

        assert item.file_exists is False
        assert item.file_status == "unknown"


class TestDeleteSoundboard:

    @pytest.fixture(autouse=True)
    def _service(self, fake_synthesizer, fake_blob_store):
        self.store = fake_blob_store
        self.service = SoundboardService(fake_synthesizer, fake_blob_store)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "soundboard_id",
        ["6f1c1a44-2a52-4c0c-9a4c-5b7a1f0e9d11", "not-a-uuid"],
    )
    async def test_unknown_id_is_not_found_without_blob_call(self, db_session, soundboard_id):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.delete(db_session, soundboard_id)

        assert exc_info.value.message == "Soundboard not found"
        assert self.store.delete_calls == []

    @pytest.mark.asyncio
    async def test_delete_removes_blob_and_row(self, db_session):
        created = await self.service.create(db_session, title="T", text="X", owner_email=OWNER)

        await self.service.delete(db_session, str(created.id))

        assert self.store.delete_calls == [created.file_name]
        assert created.file_name not in self.store.objects
        assert await _count(db_session) == 0

    @pytest.mark.asyncio
    async def test_blob_delete_failure_still_removes_row(self, db_session):
        created = await self.service.create(db_session, title="T", text="X", owner_email=OWNER)
        self.store.fail_delete = True

        await self.service.delete(db_session, str(created.id))

        assert self.store.delete_calls == [created.file_name]
        assert await _count(db_session) == 0
