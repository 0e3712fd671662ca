import pytest

from opsrunner.form import FormError, FormState, is_empty, is_valid


def test_initial_values_are_declared_defaults(catalog):
    form = FormState(catalog.get("jira-close-bulk"))
    assert form.values == {"disable_zabbix": True}


def test_switching_script_resets_to_exact_defaults(catalog):
    form = FormState(catalog.get("jira-set-flag-single"))
    form.set_value("issue_key", "OPS-42")
    form.set_value("disable_zabbix", True)

    form.select(catalog.get("jira-close-bulk"))
    assert form.values == {"disable_zabbix": True}
    assert "issue_key" not in form.values

    form.select(catalog.get("jira-set-flag-single"))
    assert form.values == {"disable_zabbix": False}


def test_validity_example_single_flag(catalog):
    script = catalog.get("jira-set-flag-single")
    assert not is_valid(script, {"issue_key": ""})
    assert not is_valid(script, {"issue_key": "   "})
    assert not is_valid(script, {})
    assert is_valid(script, {"issue_key": "OPS-42"})


def test_form_tracks_validity_on_every_update(catalog):
    form = FormState(catalog.get("jira-set-flag-bulk"))
    assert not form.is_valid
    assert form.missing_required() == ["jql"]
    form.set_value("jql", "project = OPS")
    assert form.is_valid
    form.set_value("jql", "  ")
    assert not form.is_valid


def test_booleans_are_never_empty():
    assert not is_empty(False)
    assert not is_empty(True)
    assert is_empty(None)
    assert is_empty(" \t")
    assert not is_empty("0")


def test_unknown_key_is_rejected(catalog):
    form = FormState(catalog.get("jira-set-flag-single"))
    with pytest.raises(FormError):
        form.set_value("jql", "project = OPS")
    assert set(form.values) <= {"issue_key", "disable_zabbix"}


def test_boolean_fields_are_coerced(catalog):
    form = FormState(catalog.get("jira-set-flag-single"))
    assert form.set_value("disable_zabbix", "true") is True
    assert form.set_value("disable_zabbix", "off") is False
    assert form.set_value("disable_zabbix", 1) is True
    assert form.set_value("issue_key", 42) == "42"


def test_controls_follow_declaration_order(catalog):
    form = FormState(catalog.get("jira-set-flag-single"))
    controls = form.controls()
    assert [c["key"] for c in controls] == ["issue_key", "disable_zabbix"]
    assert controls[0]["value"] == ""
    assert controls[0]["required"] is True
    assert controls[0]["placeholder"] == "OPS-1234"
    assert controls[1]["type"] == "boolean"
    assert controls[1]["value"] is False
