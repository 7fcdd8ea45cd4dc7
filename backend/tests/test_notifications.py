"""공고 알림 발송 서비스 테스트"""

import asyncio
from decimal import Decimal

import pytest

from localjobs.config import settings
from localjobs.exceptions import BatchWriteError
from localjobs.models.domain import Coordinate, NotificationScope
from localjobs.services.notifications import (
    NotificationDispatcher,
    build_message,
    format_wage,
)

from conftest import DELHI, FakeRepository, make_job, make_worker

NEARBY = Coordinate(28.6319, 77.2090)  # 약 2.0km
FAR = Coordinate(28.8139, 77.2090)  # 약 22km


def _dispatch(repository, job_id="job-1", **kwargs):
    return asyncio.run(NotificationDispatcher(repository, **kwargs).dispatch(job_id))


class TestNoOp:
    """발송하지 않는 경우"""

    def test_job_not_found(self):
        repo = FakeRepository(workers=[make_worker()])

        result = _dispatch(repo, "missing")

        assert result.dispatched is False
        assert result.message == "Job not found, skipping notifications"
        assert repo.notifications == {}

    def test_all_scope_without_coordinates(self):
        repo = FakeRepository(
            jobs=[make_job(coordinate=None)],
            workers=[make_worker(), make_worker("worker-2")],
        )

        result = _dispatch(repo)

        assert result.dispatched is False
        assert result.message == "Job has no location data, skipping notifications"
        assert repo.notifications == {}
        assert repo.candidate_queries == []

    def test_local_scope_without_postal_code(self):
        repo = FakeRepository(
            jobs=[make_job(scope=NotificationScope.LOCAL, postal_code=None)],
            workers=[make_worker(postal_code=None)],
        )

        result = _dispatch(repo)

        assert result.dispatched is False
        assert repo.notifications == {}


class TestLocalDispatch:
    """local 범위 발송"""

    def test_same_postal_code_only(self):
        repo = FakeRepository(
            jobs=[make_job(scope=NotificationScope.LOCAL, coordinate=None)],
            workers=[
                make_worker("w-same", coordinate=None, completion=20),
                make_worker("w-other", postal_code="400001"),
                make_worker("w-muted", alerts=False),
            ],
        )

        result = _dispatch(repo)

        assert result.dispatched is True
        assert result.notified == 1
        assert set(r.user_id for r in repo.notifications.values()) == {"w-same"}
        assert repo.candidate_queries[0][:2] == (NotificationScope.LOCAL, "110001")

    def test_message_says_in_your_area(self):
        repo = FakeRepository(
            jobs=[make_job(scope=NotificationScope.LOCAL)],
            workers=[make_worker(coordinate=NEARBY)],
        )

        _dispatch(repo)

        record = repo.notifications["job-1_worker-1"]
        assert record.message == "Pipe repair - ₹500/day - in your area"
        assert record.scope == NotificationScope.LOCAL
        assert record.distance_km == pytest.approx(2.0, abs=0.05)


class TestAllDispatch:
    """all 범위 발송"""

    def test_radius_and_completion(self):
        repo = FakeRepository(
            jobs=[make_job(location="Connaught Place")],
            workers=[
                make_worker("w-near", coordinate=NEARBY),
                make_worker("w-far", coordinate=FAR),
                make_worker("w-far-wide", coordinate=FAR, radius_km=30),
                make_worker("w-incomplete", coordinate=NEARBY, completion=90),
                make_worker("w-no-coord", coordinate=None),
            ],
        )

        result = _dispatch(repo)

        assert result.notified == 2
        assert result.candidates == 4
        assert result.message == "Notified 2 workers within range"
        notified = {r.user_id for r in repo.notifications.values()}
        assert notified == {"w-near", "w-far-wide"}

    def test_record_content(self):
        repo = FakeRepository(
            jobs=[make_job(location="Connaught Place", wage="650")],
            workers=[make_worker(coordinate=NEARBY)],
        )

        _dispatch(repo)

        record = repo.notifications["job-1_worker-1"]
        assert record.title == "New Job Available!"
        assert record.type == "job_alert"
        assert record.job_location == "Connaught Place"
        assert record.message == "Pipe repair - ₹650/day - 2.0km away"

    def test_custom_default_radius(self):
        repo = FakeRepository(jobs=[make_job()], workers=[make_worker(coordinate=FAR)])

        result = _dispatch(repo, default_radius_km=25.0)

        assert result.notified == 1

    def test_no_candidates(self):
        repo = FakeRepository(jobs=[make_job()])

        result = _dispatch(repo)

        assert result.dispatched is True
        assert result.notified == 0
        assert result.message == "Notified 0 workers within range"


class TestRedelivery:
    """같은 공고 이벤트 재전송"""

    def test_second_dispatch_adds_nothing(self):
        repo = FakeRepository(
            jobs=[make_job()],
            workers=[make_worker("w-1"), make_worker("w-2")],
        )

        first = _dispatch(repo)
        second = _dispatch(repo)

        assert first.notified == 2
        assert second.notified == 0
        assert second.duplicates == 2
        assert len(repo.notifications) == 2

    def test_duplicate_candidates_notified_once(self):
        worker = make_worker("w-1")
        repo = FakeRepository(jobs=[make_job()], workers=[worker, worker])

        result = _dispatch(repo)

        assert result.notified == 1


class TestWriteFailure:
    """저장 실패"""

    def test_batch_write_error_propagates(self):
        repo = FakeRepository(
            jobs=[make_job()],
            workers=[make_worker("w-1"), make_worker("w-2")],
            fail_writes=True,
        )

        with pytest.raises(BatchWriteError) as exc_info:
            _dispatch(repo)

        assert exc_info.value.job_id == "job-1"
        assert exc_info.value.attempted == 2
        assert repo.notifications == {}


class TestMessage:
    """알림 문구"""

    def test_format_wage(self):
        assert format_wage(Decimal("500")) == "500"
        assert format_wage(Decimal("500.00")) == "500"
        assert format_wage(Decimal("499.50")) == "499.5"

    def test_all_scope_distance(self):
        assert build_message(make_job(), 3.456) == "Pipe repair - ₹500/day - 3.5km away"

    def test_missing_distance(self):
        assert build_message(make_job(), None) == "Pipe repair - ₹500/day - in your area"

    def test_zero_distance(self):
        assert build_message(make_job(coordinate=DELHI), 0.0) == "Pipe repair - ₹500/day - 0.0km away"


class TestSettingsThresholds:
    """반경/완성도 기준은 settings에서"""

    def test_dispatcher_uses_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "DEFAULT_RADIUS_KM", 25.0)
        monkeypatch.setattr(settings, "BROADCAST_MIN_COMPLETION", 80)
        repo = FakeRepository(
            jobs=[make_job()],
            workers=[make_worker("w-far", coordinate=FAR, completion=80)],
        )

        result = _dispatch(repo)

        assert result.notified == 1
        assert repo.candidate_queries[0][2] == 80
