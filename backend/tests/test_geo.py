from backend.core.geo import coordinate_pair, haversine_distance_km


def test_haversine_zero_for_same_point():
    assert haversine_distance_km(-23.55, -46.63, -23.55, -46.63) == 0.0


def test_haversine_sao_paulo_to_rio_is_roughly_360km():
    distance = haversine_distance_km(-23.5505, -46.6333, -22.9068, -43.1729)
    assert 355 < distance < 365


def test_coordinate_pair_requires_both_values():
    assert coordinate_pair(-23.5, None) is None
    assert coordinate_pair(None, -46.6) is None
    assert coordinate_pair("-23.5", "-46.6") == (-23.5, -46.6)


def test_coordinate_pair_rejects_out_of_range_and_garbage():
    assert coordinate_pair(91, 0) is None
    assert coordinate_pair(0, 181) is None
    assert coordinate_pair("north", 0) is None
