"""거리 계산 유틸리티 테스트"""

import pytest

from localjobs.exceptions import InvalidCoordinateError
from localjobs.models.domain import Coordinate
from localjobs.utils.distance import distance_between, distance_km, haversine_km

DELHI = Coordinate(28.6139, 77.2090)
MUMBAI = Coordinate(19.0760, 72.8777)


class TestHaversine:
    """haversine_km / distance_km 테스트"""

    def test_delhi_to_mumbai(self):
        # 대권 거리 약 1148km
        assert distance_km(DELHI, MUMBAI) == pytest.approx(1148, abs=5)

    def test_symmetric(self):
        pairs = [
            (DELHI, MUMBAI),
            (Coordinate(-33.8688, 151.2093), Coordinate(51.5074, -0.1278)),
            (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
        ]
        for a, b in pairs:
            assert distance_km(a, b) == pytest.approx(distance_km(b, a), abs=1e-9)

    def test_zero_self_distance(self):
        assert distance_km(DELHI, DELHI) == 0
        assert distance_km(MUMBAI, MUMBAI) == 0

    def test_non_negative(self):
        assert haversine_km(10, 10, -10, -10) > 0

    def test_one_degree_latitude(self):
        # 위도 1도 ≈ 111.19km (R=6371)
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)

    def test_antimeridian_short_path(self):
        # 경도 ±180 경계를 넘는 최단 거리
        assert haversine_km(0, 179.9, 0, -179.9) == pytest.approx(22.24, abs=0.01)


class TestDistanceBetween:
    """distance_between 테스트"""

    def test_missing_coordinate_returns_none(self):
        assert distance_between(None, DELHI) is None
        assert distance_between(DELHI, None) is None
        assert distance_between(None, None) is None

    def test_both_present(self):
        assert distance_between(DELHI, MUMBAI) == distance_km(DELHI, MUMBAI)


class TestCoordinate:
    """Coordinate 범위 검증 테스트"""

    def test_valid_bounds(self):
        Coordinate(90, 180)
        Coordinate(-90, -180)

    def test_latitude_out_of_range(self):
        with pytest.raises(InvalidCoordinateError):
            Coordinate(90.0001, 0)

    def test_longitude_out_of_range(self):
        with pytest.raises(InvalidCoordinateError):
            Coordinate(0, -180.5)

    def test_from_values_missing(self):
        assert Coordinate.from_values(None, 77.2) is None
        assert Coordinate.from_values(28.6, None) is None

    def test_from_values_zero_is_valid(self):
        # 0은 누락이 아님
        assert Coordinate.from_values(0, 0) == Coordinate(0.0, 0.0)
