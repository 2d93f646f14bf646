"""
URL Scoring Tests

Tests for the crawl priority heuristic.
"""

from types import SimpleNamespace

from rankcrawler.domain.scoring import (
    PriorityScorer,
    ScoringRules,
    count_path_segments,
    explain_score,
    rules_from_settings,
    score_url,
)

RULES = ScoringRules(
    preferred_domains=("metmuseum.org", "nps.gov"),
    preferred_path_segments=("/exhibitions/", "/collections/"),
)


class TestPathSegments:
    def test_root(self):
        assert count_path_segments("/") == 0
        assert count_path_segments("") == 0

    def test_nested(self):
        assert count_path_segments("/a/b/c") == 3

    def test_ignores_empty_components(self):
        assert count_path_segments("/a//b/") == 2


class TestScoreUrl:
    def test_plain_root_url(self):
        # shallowness only: 10 - 0
        assert score_url("https://example.com/", RULES) == 10

    def test_depth_lowers_score(self):
        assert score_url("https://example.com/a/b/c", RULES) == 7

    def test_preferred_domain(self):
        assert score_url("https://metmuseum.org/", RULES) == 20

    def test_preferred_subdomain(self):
        assert score_url("https://www.metmuseum.org/", RULES) == 20

    def test_lookalike_domain_not_preferred(self):
        assert score_url("https://notmetmuseum.org/", RULES) == 10

    def test_preferred_path(self):
        # 5 + (10 - 2)
        assert score_url("https://example.com/exhibitions/modern", RULES) == 13

    def test_all_components(self):
        # 10 + 5 + (10 - 2)
        assert score_url("https://www.nps.gov/collections/item", RULES) == 23

    def test_path_bonus_applied_once(self):
        url = "https://example.com/exhibitions/collections/x"
        assert score_url(url, RULES) == 5 + (10 - 3)

    def test_very_deep_url_goes_negative(self):
        url = "https://example.com/" + "/".join(["x"] * 12)
        assert score_url(url, RULES) == -2

    def test_deterministic(self):
        url = "https://www.nps.gov/exhibitions/a/b"
        assert score_url(url, RULES) == score_url(url, RULES)


def test_explain_score_components():
    breakdown = explain_score("https://www.metmuseum.org/collections/1", RULES)
    assert breakdown.domain_bonus == 10
    assert breakdown.path_bonus == 5
    assert breakdown.path_segments == 2
    assert breakdown.shallowness_bonus == 8
    assert breakdown.total == 23


def test_custom_weights():
    rules = ScoringRules(
        preferred_domains=("example.com",),
        domain_weight=100,
        path_weight=1,
        shallowness_base=0,
    )
    assert score_url("https://example.com/a", rules) == 99


def test_priority_scorer_callable():
    scorer = PriorityScorer(RULES)
    url = "https://metmuseum.org/exhibitions/"
    assert scorer(url) == scorer.score(url) == score_url(url, RULES)


def test_priority_scorer_default_rules():
    scorer = PriorityScorer()
    assert scorer("https://metmuseum.org/") == 10


def test_rules_from_settings():
    settings = SimpleNamespace(
        CRAWL_PREFERRED_DOMAINS=["a.org", "b.org"],
        CRAWL_PREFERRED_PATHS=["/x/"],
        CRAWL_DOMAIN_WEIGHT=3,
        CRAWL_PATH_WEIGHT=2,
        CRAWL_SHALLOWNESS_BASE=7,
    )
    rules = rules_from_settings(settings)
    assert rules.preferred_domains == ("a.org", "b.org")
    assert rules.preferred_path_segments == ("/x/",)
    assert rules.domain_weight == 3
    assert rules.path_weight == 2
    assert rules.shallowness_base == 7
