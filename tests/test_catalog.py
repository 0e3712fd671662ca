import pytest

from opsrunner.catalog import CatalogError, DangerLevel, FieldType, load_catalog, parse_catalog


def _script(**overrides):
    raw = {
        "id": "demo",
        "name": "Demo",
        "description": "Demo script",
        "category": "Jira",
        "icon": "Ticket",
        "danger_level": "low",
        "path_rule": {"flag": "toggle", "when_true": "a.py", "when_false": "b.py"},
        "fields": [
            {"key": "name", "label": "Name", "type": "text", "arg_flag": "--name", "required": True},
            {"key": "toggle", "label": "Toggle", "type": "boolean", "default": False},
        ],
    }
    raw.update(overrides)
    return raw


def test_bundled_catalog_lists_jira_scripts_in_order(catalog):
    assert catalog.ids() == ["jira-set-flag-single", "jira-set-flag-bulk", "jira-close-bulk"]
    assert catalog.first().id == "jira-set-flag-single"


def test_bundled_catalog_field_schema(catalog):
    close = catalog.get("jira-close-bulk")
    assert close.danger_level is DangerLevel.HIGH
    jql = close.field("jql")
    assert jql.type is FieldType.TEXTAREA
    assert jql.arg_flag == "--jql"
    assert jql.required is True
    toggle = close.field("disable_zabbix")
    assert toggle.arg_flag is None
    assert close.defaults() == {"disable_zabbix": True}


def test_path_rule_is_total_over_values(catalog):
    for script in catalog:
        for values in ({}, script.defaults(), {"disable_zabbix": True}, {"disable_zabbix": False}):
            path = script.resolve_script_path(values, "/scripts")
            assert path.startswith("/scripts/")
            assert path.endswith(".py")


def test_path_rule_selects_variant(catalog):
    single = catalog.get("jira-set-flag-single")
    assert single.resolve_script_path({"disable_zabbix": True}, "/s") == "/s/jira_set_flag_with_triggers.py"
    assert single.resolve_script_path({"disable_zabbix": False}, "/s") == "/s/jira_set_flag_simple.py"


def test_search_matches_name_or_description_case_insensitively(catalog):
    assert [s.id for s in catalog.search("CLOSE issues")] == ["jira-close-bulk"]
    assert [s.id for s in catalog.search("ready to close")] == [
        "jira-set-flag-single", "jira-set-flag-bulk",
    ]
    assert len(catalog.search("   ")) == 3
    assert catalog.search("kubernetes") == []


def test_risk_flags(catalog):
    assert not catalog.get("jira-set-flag-single").is_risky
    assert catalog.get("jira-set-flag-bulk").is_risky
    assert not catalog.get("jira-set-flag-bulk").is_high_risk
    assert catalog.get("jira-close-bulk").is_high_risk


def test_parse_rejects_duplicate_ids():
    with pytest.raises(CatalogError, match="already registered"):
        parse_catalog([_script(), _script()])


def test_parse_rejects_path_rule_on_undeclared_field():
    bad = _script(path_rule={"flag": "missing", "when_true": "a.py", "when_false": "b.py"})
    with pytest.raises(CatalogError, match="not a declared field"):
        parse_catalog([bad])


def test_parse_rejects_select_without_options():
    bad = _script(fields=[
        {"key": "toggle", "label": "Toggle", "type": "boolean"},
        {"key": "env", "label": "Env", "type": "select"},
    ])
    with pytest.raises(CatalogError, match="needs options"):
        parse_catalog([bad])


def test_parse_rejects_unknown_danger_level_and_keys():
    with pytest.raises(CatalogError):
        parse_catalog([_script(danger_level="apocalyptic")])
    with pytest.raises(CatalogError):
        parse_catalog([_script(colour="red")])


def test_select_options_become_tuple():
    raw = _script(fields=[
        {"key": "toggle", "label": "Toggle", "type": "boolean"},
        {"key": "env", "label": "Env", "type": "select", "options": ["prod", "stage"], "default": "stage"},
    ])
    script = parse_catalog([raw]).first()
    assert script.field("env").options == ("prod", "stage")
    assert script.defaults() == {"env": "stage"}


def test_load_catalog_missing_file(tmp_path):
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope.yaml")
