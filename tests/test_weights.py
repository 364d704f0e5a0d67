from core.weights import DEFAULT_WEIGHTS, EVENT_TYPES, EventWeights, engagement_score, normalize_weights


def test_default_weights_table():
    assert DEFAULT_WEIGHTS.as_dict() == {
        "play_track": 1,
        "like_track": 2,
        "add_track_to_playlist": 2,
        "share_track": 3,
    }
    assert set(EVENT_TYPES) == set(DEFAULT_WEIGHTS.as_dict())


def test_engagement_score_uses_each_weight():
    row = {"play_track_count": 4, "share_track_count": 2, "add_track_to_playlist_count": 1, "like_track_count": 3}
    assert engagement_score(row) == 4 * 1 + 2 * 3 + 1 * 2 + 3 * 2


def test_engagement_score_missing_counts_are_zero():
    assert engagement_score({"play_track_count": 5}) == 5
    assert engagement_score({}) == 0


def test_engagement_score_custom_weights():
    weights = EventWeights(play_track=0, like_track=0, add_track_to_playlist=0, share_track=10)
    assert engagement_score({"play_track_count": 7, "share_track_count": 2}, weights) == 20


def test_normalize_weights_falls_back_and_clamps():
    weights = normalize_weights({"play_track": "5", "like_track": "lots", "share_track": -4, "bogus": 9, "add_track_to_playlist": True})
    assert weights == EventWeights(play_track=5, like_track=2, add_track_to_playlist=2, share_track=0)


def test_normalize_weights_empty():
    assert normalize_weights(None) == DEFAULT_WEIGHTS
