"""Tests for :mod:`alertsink.alertmanager.template`."""

from alertsink.alertmanager.template import render_annotations, render_template

LABELS = {
    "alertname": "test1",
    "severity": "critical",
    "series": "root.ln.wt01.wf01.temperature",
    "value": "100.0",
}


class TestRenderTemplate:
    """Verify single-pass placeholder substitution."""

    def test_known_keys_replaced(self):
        """Every known placeholder is replaced by its label value."""
        text = "{{.alertname}}: {{.series}} is {{.value}}"
        assert render_template(text, LABELS) == "test1: root.ln.wt01.wf01.temperature is 100.0"

    def test_unknown_key_left_verbatim(self):
        """Placeholders naming a missing label stay as written."""
        assert render_template("{{.host}} is down", LABELS) == "{{.host}} is down"

    def test_repeated_placeholder(self):
        """Every occurrence of a placeholder is replaced."""
        assert render_template("{{.value}}/{{.value}}", LABELS) == "100.0/100.0"

    def test_case_sensitive(self):
        """Keys match case-sensitively."""
        assert render_template("{{.Severity}}", LABELS) == "{{.Severity}}"

    def test_no_placeholders(self):
        """Plain text passes through untouched."""
        assert render_template("high temperature", LABELS) == "high temperature"

    def test_replacement_not_rescanned(self):
        """A label value that looks like a placeholder is emitted literally."""
        labels = {"a": "{{.b}}", "b": "x"}
        assert render_template("{{.a}}", labels) == "{{.b}}"

    def test_other_brace_forms_ignored(self):
        """Only the ``{{.KEY}}`` form is recognised."""
        text = "{{alertname}} {.alertname} {{ .alertname }}"
        assert render_template(text, LABELS) == text


class TestRenderAnnotations:
    """Verify annotation-wide rendering."""

    def test_preserves_order_and_keys(self):
        """Keys and their order are unchanged; values are rendered."""
        rendered = render_annotations(
            {"summary": "high temperature", "description": "{{.series}}"},
            LABELS,
        )
        assert list(rendered) == ["summary", "description"]
        assert rendered["description"] == "root.ln.wt01.wf01.temperature"

    def test_empty(self):
        """No annotations renders to an empty dict."""
        assert render_annotations({}, LABELS) == {}
