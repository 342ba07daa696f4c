from collections import namedtuple

from geotiles.rowmapper import get_path, map_rows_to_edges, map_rows_to_features

Sentiment = namedtuple("Sentiment", ["pos_avg", "neg_avg"])
Features = namedtuple("Features", ["mentions", "sentiment"])
Row = namedtuple("Row", ["tileid", "computedfeatures"])


def _row(tile_id, mentions, pos, neg):
    return {
        "tileid": tile_id,
        "computedfeatures": {
            "mentions": mentions,
            "sentiment": {"pos_avg": pos, "neg_avg": neg},
        },
    }


def test_row_projected_into_feature():
    features = map_rows_to_features([_row("8_1_2", 12, 0.7, 0.1)])

    assert len(features) == 1
    assert features[0]["type"] == "Feature"
    assert features[0]["properties"] == {
        "tileId": "8_1_2",
        "mentionCount": 12,
        "pos_sentiment": 0.7,
        "neg_sentiment": 0.1,
    }


def test_last_row_wins_for_duplicate_tile_id():
    rows = [
        _row("a", 1, 0.1, 0.2),
        _row("b", 5, 0.5, 0.5),
        _row("a", 9, 0.9, 0.0),
    ]

    features = map_rows_to_features(rows)

    assert [f["properties"]["tileId"] for f in features] == ["a", "b"]
    assert features[0]["properties"]["mentionCount"] == 9
    assert features[0]["properties"]["pos_sentiment"] == 0.9


def test_missing_nested_values_are_none():
    rows = [
        {"tileid": "a", "computedfeatures": None},
        {"tileid": "b", "computedfeatures": {"mentions": 3}},
        {"tileid": "c"},
    ]

    features = map_rows_to_features(rows)

    assert features[0]["properties"] == {
        "tileId": "a",
        "mentionCount": None,
        "pos_sentiment": None,
        "neg_sentiment": None,
    }
    assert features[1]["properties"]["mentionCount"] == 3
    assert features[1]["properties"]["pos_sentiment"] is None
    assert features[2]["properties"]["neg_sentiment"] is None


def test_named_tuple_rows():
    rows = [Row("a", Features(4, Sentiment(0.25, 0.5)))]

    features = map_rows_to_features(rows)

    assert features[0]["properties"]["mentionCount"] == 4
    assert features[0]["properties"]["neg_sentiment"] == 0.5


def test_no_rows():
    assert map_rows_to_features([]) == []


def test_get_path_stops_at_none():
    assert get_path({"a": None}, "a", "b", "c") is None


def test_edges_sum_mentions_per_keyword():
    rows = [
        {"tileid": "a", "keyword": "flood", "computedfeatures": {"mentions": 3}},
        {"tileid": "b", "keyword": "rain", "computedfeatures": {"mentions": 10}},
        {"tileid": "c", "keyword": "flood", "computedfeatures": {"mentions": 4}},
        {"tileid": "d", "keyword": "storm", "computedfeatures": None},
        {"tileid": "e", "keyword": None, "computedfeatures": {"mentions": 50}},
    ]

    assert map_rows_to_edges(rows) == [
        {"type": "Term", "name": "rain", "mentionCount": 10},
        {"type": "Term", "name": "flood", "mentionCount": 7},
        {"type": "Term", "name": "storm", "mentionCount": 0},
    ]


def test_edges_tie_broken_by_name():
    rows = [
        {"keyword": "b", "computedfeatures": {"mentions": 1}},
        {"keyword": "a", "computedfeatures": {"mentions": 1}},
    ]

    assert [e["name"] for e in map_rows_to_edges(rows)] == ["a", "b"]
