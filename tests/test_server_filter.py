"""过滤选项规范化测试。"""
from app.schemas.server import FilterOptions
from app.services.server_filter import normalize_filter_options, to_boolean


class TestToBoolean:
    def test_bool_passthrough(self):
        assert to_boolean(True) is True
        assert to_boolean(False) is False

    def test_true_string_any_case(self):
        assert to_boolean("true") is True
        assert to_boolean("TRUE") is True
        assert to_boolean("True") is True

    def test_other_values_are_false(self):
        for value in ("false", "yes", "1", "", None, 1, 0.0, ["true"]):
            assert to_boolean(value) is False


class TestNormalizeFilterOptions:
    def test_empty_input_gives_defaults(self):
        assert normalize_filter_options({}) == FilterOptions()
        assert normalize_filter_options(None) == FilterOptions()

    def test_enum_strings_pass_through_unchanged(self):
        options = normalize_filter_options({"os": "win", "state": "connect", "license": "assign"})
        assert options.os == "win"
        assert options.state == "connect"
        assert options.license == "assign"

    def test_invalid_enum_value_is_not_rejected(self):
        options = normalize_filter_options({"os": "mac"})
        assert options.os == "mac"

    def test_flags_coerced(self):
        options = normalize_filter_options({
            "network": "true", "disk": "False", "partition": "garbage", "repository": True, "detail": "TRUE",
        })
        assert options.network is True
        assert options.disk is False
        assert options.partition is False
        assert options.repository is True
        assert options.detail is True

    def test_unknown_keys_ignored(self):
        options = normalize_filter_options({"page": "2", "os": "lin"})
        assert options == FilterOptions(os="lin")
