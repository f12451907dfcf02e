"""
Fuzzy Matcher Tests

Covers ranking, thresholding and the Fuse-style options the matcher
passes through to its scoring.
"""

from blog_search.search.engine import FuzzyMatcher
from blog_search.search.models import MatchOptions, SearchRecord


def _titles(hits):
    return [h.record.title for h in hits]


def test_partial_query_matches_only_related_record(sample_records):
    matcher = FuzzyMatcher(sample_records)

    hits = matcher.search("argo")

    assert [h.record.permalink for h in hits] == ["/posts/argocd"]


def test_unrelated_query_returns_nothing(sample_records):
    matcher = FuzzyMatcher(sample_records)
    assert matcher.search("xyz123") == []


def test_empty_query_returns_nothing(sample_records):
    matcher = FuzzyMatcher(sample_records)
    assert matcher.search("") == []


def test_exact_title_ranks_first():
    records = [
        SearchRecord(title="Docker Compose Basics", permalink="/posts/compose"),
        SearchRecord(title="Docker Race Conditions", permalink="/posts/docker-race"),
        SearchRecord(title="Go Networking", permalink="/posts/go-net"),
    ]
    matcher = FuzzyMatcher(records)

    hits = matcher.search("Docker Race Conditions")

    assert hits[0].record.permalink == "/posts/docker-race"
    assert all(hits[0].score <= h.score for h in hits)


def test_same_query_twice_is_identical(sample_records):
    matcher = FuzzyMatcher(sample_records)
    assert matcher.search("sql basics") == matcher.search("sql basics")


def test_case_insensitive_by_default(sample_records):
    matcher = FuzzyMatcher(sample_records)
    assert _titles(matcher.search("ARGO")) == ["ArgoCD Setup"]


def test_case_sensitive_option(sample_records):
    matcher = FuzzyMatcher(sample_records, MatchOptions(is_case_sensitive=True))
    assert matcher.search("ARGO") == []


def test_regex_metacharacters_are_literal(sample_records):
    matcher = FuzzyMatcher(sample_records)
    # Must not raise; these are just characters to match
    assert isinstance(matcher.search("[(.*+?"), list)
    assert isinstance(matcher.search("c++ \\d{2}"), list)


def test_sorted_by_score_unless_disabled():
    records = [
        SearchRecord(title="Kubernetez operators", permalink="/posts/typo"),
        SearchRecord(title="Kubernetes ArgoCD", permalink="/posts/k8s"),
    ]

    sorted_hits = FuzzyMatcher(records).search("kubernetes")
    assert [h.record.permalink for h in sorted_hits] == ["/posts/k8s", "/posts/typo"]

    unsorted = FuzzyMatcher(records, MatchOptions(should_sort=False)).search("kubernetes")
    assert [h.record.permalink for h in unsorted] == ["/posts/typo", "/posts/k8s"]


def test_threshold_zero_requires_exact_substring():
    records = [
        SearchRecord(title="Kubernetez operators", permalink="/posts/typo"),
        SearchRecord(title="Kubernetes ArgoCD", permalink="/posts/k8s"),
    ]
    matcher = FuzzyMatcher(records, MatchOptions(threshold=0.0))

    assert [h.record.permalink for h in matcher.search("kubernetes")] == ["/posts/k8s"]


def test_far_matches_penalised_by_location():
    record = SearchRecord(
        title="Lazy",
        permalink="/posts/far",
        content="x" * 500 + " kubernetes",
    )

    assert FuzzyMatcher([record]).search("kubernetes") == []

    lenient = FuzzyMatcher([record], MatchOptions(ignore_location=True))
    assert [h.record.permalink for h in lenient.search("kubernetes")] == ["/posts/far"]

    wide = FuzzyMatcher([record], MatchOptions(distance=100000))
    assert [h.record.permalink for h in wide.search("kubernetes")] == ["/posts/far"]


def test_near_match_not_hidden_by_far_exact_match():
    record = SearchRecord(
        title="Lazy",
        permalink="/posts/near",
        content="kubernetez " + "x" * 300 + " kubernetes",
    )

    hits = FuzzyMatcher([record]).search("kubernetes")

    assert [h.record.permalink for h in hits] == ["/posts/near"]


def test_short_field_inside_long_query_is_not_a_match():
    records = [SearchRecord(title="Go", permalink="/posts/go")]
    assert FuzzyMatcher(records).search("kubernetes argocd going deep") == []


def test_short_tag_does_not_match_longer_query():
    records = [
        SearchRecord(title="Networking", permalink="/posts/go-net", tags=["go"]),
        SearchRecord(title="Document stores", permalink="/posts/mongo", tags=["mongodb"]),
    ]

    hits = FuzzyMatcher(records).search("mongodb")

    assert [h.record.permalink for h in hits] == ["/posts/mongo"]


def test_min_match_char_length():
    records = [SearchRecord(title="Go", permalink="/posts/go")]

    assert len(FuzzyMatcher(records).search("go")) == 1
    assert FuzzyMatcher(records, MatchOptions(min_match_char_length=3)).search("go") == []


def test_tags_are_matched():
    records = [SearchRecord(title="Tracing", permalink="/posts/otel", tags=["opentelemetry"])]
    hits = FuzzyMatcher(records).search("opentelemetry")
    assert [h.record.permalink for h in hits] == ["/posts/otel"]


def test_only_configured_keys_are_matched():
    records = [SearchRecord(title="Tracing", permalink="/posts/otel", summary="opentelemetry intro")]

    assert FuzzyMatcher(records).search("opentelemetry") == []

    with_summary = FuzzyMatcher(records, MatchOptions(keys=["title", "summary"]))
    assert len(with_summary.search("opentelemetry")) == 1


def test_record_without_title_still_matches():
    records = [SearchRecord(permalink="/posts/untitled", content="argocd sync waves")]
    hits = FuzzyMatcher(records).search("argocd")

    assert len(hits) == 1
    assert hits[0].record.title is None


def test_scores_are_bounded(sample_records):
    for hit in FuzzyMatcher(sample_records).search("psql"):
        assert 0.0 <= hit.score <= 1.0


def test_match_options_accept_fuse_names():
    opts = MatchOptions.model_validate({
        "keys": ["title", {"name": "tags", "weight": 0.5}],
        "isCaseSensitive": True,
        "shouldSort": False,
        "minMatchCharLength": 0,
        "distance": 1000,
        "threshold": 0.3,
        "useExtendedSearch": True,
    })

    assert opts.key_names == ["title", "tags"]
    assert opts.keys[1].weight == 0.5
    assert opts.is_case_sensitive is True
    assert opts.should_sort is False
    assert opts.distance == 1000
    assert opts.threshold == 0.3


def test_match_options_defaults():
    opts = MatchOptions()
    assert opts.key_names == ["title", "content", "tags"]
    assert opts.threshold == 0.4
    assert opts.min_match_char_length == 0
    assert opts.location == 0
