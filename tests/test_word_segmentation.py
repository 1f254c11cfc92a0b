from word_segmentation import break_into_words, common_words


def test_word_breaking():
    expected_words = [
        "GRPC", "Route", "Rules", "Backend", "Refs", "Filters", "Request", "Mirror", "Backend",
        "Ref",
    ]  # fmt: skip
    words = break_into_words("GRPCRouteRulesBackendRefsFiltersRequestMirrorBackendRef")
    assert words == expected_words


def test_word_breaking_embedded_acronym():
    expected_words = [
        "GRPC", "Route", "Rules", "Backend", "Refs", "Filters", "Request", "HTTPS", "Mirror",
        "Backend", "Ref",
    ]  # fmt: skip
    words = break_into_words("GRPCRouteRulesBackendRefsFiltersRequestHTTPSMirrorBackendRef")
    assert words == expected_words


def test_word_breaking_three_chars():
    assert break_into_words("fRP") == ["f", "RP"]


def test_word_breaking_short_identifiers():
    assert break_into_words("Ab") == ["Ab"]
    assert break_into_words("A") == ["A"]


def test_word_breaking_pascal_case():
    assert break_into_words("FooBar") == ["Foo", "Bar"]
    assert break_into_words("HTTPRouteRulesFiltersRequestHeaderModifierAdd") == [
        "HTTP", "Route", "Rules", "Filters", "Request", "Header", "Modifier", "Add",
    ]  # fmt: skip


def test_word_breaking_trailing_two_chars_stay_together():
    # The scan stops two characters short; the tail always joins the last word.
    assert break_into_words("FooBaR") == ["Foo", "BaR"]


def test_common_words_sorted_and_deduplicated():
    assert common_words([
        ["HTTP", "Route", "Parent", "Refs"],
        ["GRPC", "Route", "Status", "Parents", "Parent", "Ref", "Route"],
    ]) == ["Parent", "Route"]


def test_common_words_empty():
    assert common_words([]) == []
    assert common_words([["Foo"], ["Bar"]]) == []
