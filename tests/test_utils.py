import pytest

from hnreader.utils import format_score, get_domain, get_time_ago

NOW = 1_700_000_000


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.example.com/a/b", "example.com"),
        ("http://news.ycombinator.com/item?id=1", "news.ycombinator.com"),
        ("https://docs.www.example.com/x", "docs.www.example.com"),
        ("not a url", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_get_domain(url, expected):
    assert get_domain(url) == expected


@pytest.mark.parametrize(
    "score, expected", [(0, "0"), (999, "999"), (1000, "1.0k"), (1234, "1.2k")]
)
def test_format_score(score, expected):
    assert format_score(score) == expected


@pytest.mark.parametrize(
    "age, expected",
    [
        (0, "just now"),
        (59, "just now"),
        (60, "1m ago"),
        (3_599, "59m ago"),
        (3_600, "1h ago"),
        (86_400 * 2, "2d ago"),
        (86_400 * 14, "2w ago"),
        (86_400 * 60, "2mo ago"),
        (86_400 * 800, "2y ago"),
    ],
)
def test_get_time_ago(age, expected):
    assert get_time_ago(NOW - age, now=NOW) == expected
