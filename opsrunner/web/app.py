"""
app.py - Flask web console for OpsRunner.
Run via:  opsrunner serve   (or python -m opsrunner serve)

Layout:
  Sidebar script catalog with search + theme toggle
  Dynamic form for the selected script, Dry Run / Execute actions
  Terminal panel fed by the NDJSON run stream
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from flask import Flask, Response, current_app, jsonify, render_template, request

from ..catalog import Catalog, get_catalog
from ..console import ConsoleError, ConsoleSession
from ..llm_engine.settings import LLM_API_KEY
from ..preferences import ThemeStore
from ..settings import PREFS_PATH

EXTENSION_KEY = "opsrunner"


def _truthy(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


def _state() -> Dict[str, Any]:
    return current_app.extensions[EXTENSION_KEY]


def _session() -> ConsoleSession:
    return _state()["session"]


def _themes() -> ThemeStore:
    return _state()["themes"]


def _has_api_key() -> bool:
    return bool(current_app.config.get("API_KEY"))


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def create_app(
    config: Optional[Dict[str, Any]] = None,
    *,
    catalog: Optional[Catalog] = None,
    session: Optional[ConsoleSession] = None,
    themes: Optional[ThemeStore] = None,
) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.update(API_KEY=LLM_API_KEY, PREFS_PATH=str(PREFS_PATH))
    if config:
        app.config.update(config)

    catalog = catalog or get_catalog()
    app.extensions[EXTENSION_KEY] = {
        "catalog": catalog,
        "session": session or ConsoleSession(catalog),
        "themes": themes or ThemeStore(app.config["PREFS_PATH"]),
    }

    # ---------------------------------------------------------------------------
    # Gate: without the LLM credential the console is unusable
    # ---------------------------------------------------------------------------
    @app.before_request
    def _require_api_key():
        if request.path.startswith("/api/") and not _has_api_key():
            return jsonify({"error": "Missing API key: configure the API_KEY environment variable."}), 503
        return None

    @app.errorhandler(ConsoleError)
    def _console_error(exc: ConsoleError):
        return jsonify({"error": str(exc)}), exc.status_code

    # ---------------------------------------------------------------------------
    # Page
    # ---------------------------------------------------------------------------
    @app.route("/")
    def index():
        prefers_dark = _truthy(request.args.get("prefers_dark"))
        theme = _themes().load(prefers_dark)
        if not _has_api_key():
            return render_template("missing_key.html", theme=theme), 503
        return render_template(
            "index.html",
            theme=theme,
            scripts=[s.summary() for s in _state()["catalog"]],
            snapshot=_session().snapshot(),
        )

    # ---------------------------------------------------------------------------
    # JSON API
    # ---------------------------------------------------------------------------
    @app.route("/api/scripts")
    def list_scripts():
        matches = _state()["catalog"].search(request.args.get("q", ""))
        return jsonify({"scripts": [s.summary() for s in matches]})

    @app.route("/api/state")
    def get_state():
        return jsonify(_session().snapshot())

    @app.route("/api/select", methods=["POST"])
    def select_script():
        script_id = _body().get("script_id")
        if not isinstance(script_id, str) or not script_id:
            return jsonify({"error": "'script_id' is required"}), 400
        session = _session()
        session.select_script(script_id)
        return jsonify(session.snapshot())

    @app.route("/api/values", methods=["POST"])
    def set_value():
        body = _body()
        key = body.get("key")
        if not isinstance(key, str) or not key:
            return jsonify({"error": "'key' is required"}), 400
        session = _session()
        valid = session.set_value(key, body.get("value"))
        return jsonify({
            "valid": valid,
            "missing": session.form.missing_required(),
            "values": dict(session.form.values),
        })

    @app.route("/api/run", methods=["POST"])
    def run_script():
        dry_run = bool(_body().get("dry_run", False))
        session = _session()
        handle = session.start_run(dry_run)
        events = session.stream(handle)

        def generate():
            for event in events:
                yield json.dumps(event, ensure_ascii=False) + "\n"

        return Response(generate(), mimetype="application/x-ndjson")

    @app.route("/api/theme", methods=["GET", "POST"])
    def theme():
        store = _themes()
        prefers_dark = _truthy(request.args.get("prefers_dark"))
        if request.method == "GET":
            return jsonify({"theme": store.load(prefers_dark)})
        wanted = _body().get("theme")
        if wanted is None:
            return jsonify({"theme": store.toggle(prefers_dark)})
        try:
            return jsonify({"theme": store.save(wanted)})
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

    return app
