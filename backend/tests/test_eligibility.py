"""알림 대상 판정 테스트"""

import pytest

from localjobs.config import settings
from localjobs.models.domain import Coordinate, NotificationScope
from localjobs.utils import eligibility
from localjobs.utils.eligibility import is_eligible

from conftest import DELHI, make_job, make_worker

# DELHI에서 북쪽으로 약 5.6km
NEARBY = Coordinate(28.6639, 77.2090)
# DELHI에서 북쪽으로 약 22km
FAR = Coordinate(28.8139, 77.2090)


class TestAlertsDisabled:
    """알림 비활성 워커"""

    def test_not_eligible_and_no_distance(self):
        job = make_job(scope=NotificationScope.LOCAL)
        worker = make_worker(alerts=False)

        result = is_eligible(job, worker)

        assert result.eligible is False
        assert result.distance_km is None
        assert result.reason == "alerts_disabled"

    def test_all_scope_also_short_circuits(self):
        result = is_eligible(make_job(), make_worker(alerts=False))
        assert result.eligible is False
        assert result.distance_km is None


class TestLocalScope:
    """local 범위 (우편번호 일치)"""

    def test_exact_match_eligible(self):
        job = make_job(scope=NotificationScope.LOCAL, postal_code="110001")
        worker = make_worker(postal_code="110001")
        assert is_eligible(job, worker).eligible is True

    def test_match_ignores_coordinates_and_completion(self):
        job = make_job(scope=NotificationScope.LOCAL, coordinate=None, postal_code="110001")
        worker = make_worker(postal_code="110001", coordinate=None, completion=10)

        result = is_eligible(job, worker)

        assert result.eligible is True
        assert result.distance_km is None

    def test_match_ignores_radius(self):
        job = make_job(scope=NotificationScope.LOCAL, postal_code="110001")
        worker = make_worker(postal_code="110001", coordinate=FAR, radius_km=1)

        result = is_eligible(job, worker)

        assert result.eligible is True
        assert result.distance_km == pytest.approx(22.2, abs=0.2)

    def test_mismatch_not_eligible(self):
        job = make_job(scope=NotificationScope.LOCAL, postal_code="110001")
        worker = make_worker(postal_code="400001")

        result = is_eligible(job, worker)

        assert result.eligible is False
        assert result.reason == "postal_code_mismatch"

    def test_job_without_postal_code(self):
        job = make_job(scope=NotificationScope.LOCAL, postal_code=None)
        worker = make_worker(postal_code="110001")

        result = is_eligible(job, worker)

        assert result.eligible is False
        assert result.reason == "job_missing_postal_code"

    def test_worker_without_postal_code(self):
        job = make_job(scope=NotificationScope.LOCAL, postal_code="110001")
        worker = make_worker(postal_code=None)
        assert is_eligible(job, worker).eligible is False


class TestAllScope:
    """all 범위 (완성도 + 반경)"""

    def test_within_default_radius(self):
        result = is_eligible(make_job(), make_worker(coordinate=NEARBY))
        assert result.eligible is True
        assert result.distance_km == pytest.approx(5.56, abs=0.05)

    def test_outside_default_radius(self):
        result = is_eligible(make_job(), make_worker(coordinate=FAR))
        assert result.eligible is False
        assert result.reason == "out_of_radius"
        assert result.distance_km is not None

    def test_custom_radius(self):
        worker = make_worker(coordinate=FAR, radius_km=25)
        assert is_eligible(make_job(), worker).eligible is True

    def test_completion_gate(self):
        worker = make_worker(coordinate=NEARBY, completion=99)

        result = is_eligible(make_job(), worker)

        assert result.eligible is False
        assert result.reason == "profile_incomplete"

    def test_custom_completion_threshold(self):
        worker = make_worker(coordinate=NEARBY, completion=80)
        assert is_eligible(make_job(), worker, min_completion=80).eligible is True

    def test_missing_job_coordinate(self):
        result = is_eligible(make_job(coordinate=None), make_worker())
        assert result.eligible is False
        assert result.distance_km is None
        assert result.reason == "missing_coordinates"

    def test_missing_worker_coordinate(self):
        result = is_eligible(make_job(), make_worker(coordinate=None))
        assert result.eligible is False
        assert result.reason == "missing_coordinates"

    def test_postal_code_irrelevant(self):
        worker = make_worker(coordinate=NEARBY, postal_code="999999")
        assert is_eligible(make_job(postal_code="110001"), worker).eligible is True

    def test_radius_boundary_inclusive(self, monkeypatch):
        monkeypatch.setattr(eligibility, "distance_km", lambda a, b: 10.0)
        result = is_eligible(make_job(), make_worker(radius_km=10))
        assert result.eligible is True
        assert result.distance_km == 10.0

    def test_radius_just_over_boundary(self, monkeypatch):
        monkeypatch.setattr(eligibility, "distance_km", lambda a, b: 10.0001)
        result = is_eligible(make_job(), make_worker(radius_km=10))
        assert result.eligible is False

    def test_same_location_eligible(self):
        result = is_eligible(make_job(coordinate=DELHI), make_worker(coordinate=DELHI))
        assert result.eligible is True
        assert result.distance_km == 0


class TestSettingsDefaults:
    """기준값 미지정 시 settings 사용"""

    def test_default_radius_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "DEFAULT_RADIUS_KM", 25.0)
        assert is_eligible(make_job(), make_worker(coordinate=FAR)).eligible is True

    def test_min_completion_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "BROADCAST_MIN_COMPLETION", 90)
        worker = make_worker(coordinate=NEARBY, completion=90)
        assert is_eligible(make_job(), worker).eligible is True

    def test_explicit_argument_wins(self, monkeypatch):
        monkeypatch.setattr(settings, "DEFAULT_RADIUS_KM", 25.0)
        worker = make_worker(coordinate=FAR)
        assert is_eligible(make_job(), worker, default_radius_km=10.0).eligible is False
