"""Tests for session issuance, validation, deletion and sweeping."""

from datetime import timedelta
from uuid import uuid4

from notebox.core.modules.session import service as session_service_module
from notebox.core.modules.session.models import Session, SessionId
from notebox.utils import now


async def insert_session(database, user_id, expires_in: timedelta) -> SessionId:
    session = Session(user_id=user_id, expires_at=now() + expires_in)
    await database.get_collection("sessions").insert_one(session.to_mongo())
    return SessionId(session.id)


class TestCreateSession:
    """Tests for SessionService.create_session."""

    async def test_round_trip(self, core, user):
        """Test that a fresh session validates to its user."""
        session_id = await core.services.session.create_session(user.id)

        context = await core.services.session.validate_session(session_id)

        assert context is not None
        assert context.user.id == user.id
        assert context.session.id == session_id
        assert context.session.expires_at > now()

    async def test_expiry_uses_configured_max_age(self, core, user):
        """Test that expiry is creation time plus the configured lifetime."""
        before = now()
        session_id = await core.services.session.create_session(user.id)
        session = await core.services.session.get_session(session_id)

        assert session is not None
        lifetime = session.expires_at - before
        assert timedelta(days=7) - timedelta(seconds=5) < lifetime <= timedelta(days=7) + timedelta(seconds=5)

    async def test_identifiers_are_unique_and_long(self, core, user):
        """Test that session ids do not repeat and carry 32 random bytes."""
        ids = {await core.services.session.create_session(user.id) for _ in range(20)}
        assert len(ids) == 20
        # 32 random bytes, urlsafe base64 without padding
        assert all(len(session_id) == 43 for session_id in ids)

    async def test_user_may_hold_several_sessions(self, core, user):
        """Test that a second session does not replace the first."""
        first = await core.services.session.create_session(user.id)
        second = await core.services.session.create_session(user.id)

        assert (await core.services.session.validate_session(first)) is not None
        assert (await core.services.session.validate_session(second)) is not None


class TestValidateSession:
    """Tests for SessionService.validate_session."""

    async def test_unknown_session(self, core):
        """Test that an unknown id is not a session."""
        assert await core.services.session.validate_session(SessionId("missing")) is None

    async def test_expired_session_is_rejected_and_removed(self, core, user, database):
        """Test that an expired session is rejected and evicted."""
        session_id = await insert_session(database, user.id, timedelta(seconds=-1))

        assert await core.services.session.validate_session(session_id) is None
        assert await database.get_collection("sessions").find_one({"_id": session_id}) is None

    async def test_session_expiring_exactly_now_is_rejected(self, core, user, database, monkeypatch):
        """Test that expiry equal to now already counts as expired."""
        frozen = now()
        session = Session(user_id=user.id, expires_at=frozen)
        await database.get_collection("sessions").insert_one(session.to_mongo())
        monkeypatch.setattr(session_service_module, "now", lambda: frozen)

        assert await core.services.session.validate_session(SessionId(session.id)) is None

    async def test_validity_is_rechecked_on_every_call(self, core, user, database):
        """Test that removing the record invalidates the session immediately."""
        session_id = await core.services.session.create_session(user.id)
        assert await core.services.session.validate_session(session_id) is not None

        await database.get_collection("sessions").delete_one({"_id": session_id})

        assert await core.services.session.validate_session(session_id) is None

    async def test_session_of_deleted_user_is_rejected(self, core, database):
        """Test that a session whose user is gone is rejected and evicted."""
        session_id = await insert_session(database, uuid4(), timedelta(hours=1))

        assert await core.services.session.validate_session(session_id) is None
        assert await database.get_collection("sessions").find_one({"_id": session_id}) is None

    async def test_eviction_failure_is_swallowed(self, core, user, database):
        """Test that a failed eviction still rejects the session."""
        session_id = await insert_session(database, user.id, timedelta(seconds=-1))
        database.get_collection("sessions").fail_deletes = True

        assert await core.services.session.validate_session(session_id) is None


class TestDeleteSession:
    """Tests for SessionService.delete_session."""

    async def test_delete_removes_session(self, core, user):
        """Test that a deleted session no longer validates."""
        session_id = await core.services.session.create_session(user.id)

        await core.services.session.delete_session(session_id)

        assert await core.services.session.validate_session(session_id) is None

    async def test_delete_unknown_session_is_noop(self, core):
        """Test that deleting an unknown id does not raise."""
        await core.services.session.delete_session(SessionId("missing"))

    async def test_double_delete(self, core, user):
        """Test that deleting twice does not raise."""
        session_id = await core.services.session.create_session(user.id)
        await core.services.session.delete_session(session_id)
        await core.services.session.delete_session(session_id)

    async def test_delete_leaves_other_sessions(self, core, user):
        """Test that deletion touches only the given session."""
        first = await core.services.session.create_session(user.id)
        second = await core.services.session.create_session(user.id)

        await core.services.session.delete_session(first)

        assert await core.services.session.validate_session(second) is not None


class TestCleanupExpiredSessions:
    """Tests for the expired-session sweep."""

    async def test_removes_exactly_the_expired(self, core, user, database):
        """Test that the sweep deletes all expired sessions and nothing else."""
        expired = [await insert_session(database, user.id, timedelta(minutes=-minutes)) for minutes in (1, 60, 600)]
        active = [await insert_session(database, user.id, timedelta(hours=hours)) for hours in (1, 24)]

        deleted = await core.services.session.cleanup_expired_sessions()

        assert deleted == 3
        remaining = {doc["_id"] for doc in database.get_collection("sessions").docs}
        assert remaining == set(active)
        assert remaining.isdisjoint(expired)

    async def test_nothing_to_sweep(self, core, user):
        """Test that a sweep with nothing expired reports zero."""
        await core.services.session.create_session(user.id)
        assert await core.services.session.cleanup_expired_sessions() == 0
