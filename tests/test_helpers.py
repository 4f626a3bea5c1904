from inline_i18n.helpers import get_deep_value, merge_deep


class TestGetDeepValue:
    def test_dotted_path(self):
        assert get_deep_value({"a": {"b": {"c": "x"}}}, "a.b.c") == "x"

    def test_missing_path(self):
        assert get_deep_value({"a": {"b": "x"}}, "a.c") is None
        assert get_deep_value({"a": "x"}, "a.b") is None
        assert get_deep_value(None, "a") is None

    def test_branch_value(self):
        assert get_deep_value({"a": {"b": "x"}}, "a") == {"b": "x"}


class TestMergeDeep:
    def test_nested_merge(self):
        assert merge_deep({"a": {"b": "1"}}, {"a": {"c": "2"}}) == {"a": {"b": "1", "c": "2"}}

    def test_source_wins(self):
        assert merge_deep({"a": "1"}, {"a": "2"}) == {"a": "2"}

    def test_target_untouched(self):
        target = {"a": {"b": "1"}}
        merge_deep(target, {"a": {"b": "2"}})
        assert target == {"a": {"b": "1"}}
