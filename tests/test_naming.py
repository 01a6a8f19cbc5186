"""Tests for identifier naming metrics."""

from devskill.services.code_features.naming import analyze_naming


class TestAnalyzeNaming:
    def test_mixed_conventions(self):
        metrics = analyze_naming("userName = get_value(x)")
        assert metrics.average_variable_name_length == 8.5
        assert metrics.camel_case_ratio == 0.5
        assert metrics.snake_case_ratio == 0.5
        assert metrics.single_char_var_count == 1

    def test_keywords_excluded(self):
        metrics = analyze_naming("return self.value")
        assert metrics.average_variable_name_length == 5.0
        assert metrics.camel_case_ratio == 0.0

    def test_keywords_case_insensitive(self):
        metrics = analyze_naming("If Return counter")
        assert metrics.average_variable_name_length == 7.0

    def test_conventions_not_exclusive(self):
        metrics = analyze_naming("parse_jsonValue")
        assert metrics.camel_case_ratio == 1.0
        assert metrics.snake_case_ratio == 1.0

    def test_single_char_names(self):
        assert analyze_naming("total = a + b").single_char_var_count == 2

    def test_no_identifiers(self):
        metrics = analyze_naming("1 + 2")
        assert metrics.average_variable_name_length == 0.0
        assert metrics.camel_case_ratio == 0.0
        assert metrics.snake_case_ratio == 0.0
        assert metrics.single_char_var_count == 0

    def test_empty_code(self):
        assert analyze_naming("").average_variable_name_length == 0.0
