from src.integrations.policy.query_params import LIST_QUERY_KEYS, build_query_params


def test_keeps_only_recognized_string_options():
    params = build_query_params({"page": "2", "limit": "10", "bogus": "x"})
    assert params == {"page": "2", "limit": "10"}


def test_drops_mistyped_values_without_error():
    params = build_query_params({"page": 2, "limit": "10", "withCount": True})
    assert params == {"limit": "10"}


def test_with_count_is_forwarded_as_string():
    params = build_query_params({"withCount": "true"})
    assert params == {"withCount": "true"}


def test_empty_or_missing_options_give_no_params():
    assert build_query_params(None) == {}
    assert build_query_params({}) == {}
    assert build_query_params({"search": "{}", "locales": "en_US"}) == {}


def test_output_follows_whitelist_order():
    params = build_query_params({"withCount": "false", "limit": "5", "page": "3"})
    assert list(params) == list(LIST_QUERY_KEYS)


def test_custom_whitelist():
    params = build_query_params({"page": "1", "search": "x"}, allowed=("search",))
    assert params == {"search": "x"}
