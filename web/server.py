"""
DIRE Web API - Flask backend for enrichment.

Provides REST endpoints for:
- /api/rules - Rule ids in application order
- /api/groups - Group tree with the tri-state of each node under a profile
- /api/enrich - Enrich a text or a batch of pages
"""

from flask import Flask, jsonify, request
from flask_cors import CORS

from dire.cli.main import build_options
from dire.core.engine import get_enricher
from dire.core.logging import LogChannel, bind_request_context, clear_request_context, get_logger
from dire.groups import (
    GroupConfigError,
    all_state,
    apply_profile,
    get_tree,
    group_state,
    list_profiles,
    load_profile,
)
from dire.ir.schema import EnrichmentOptions, TextDocument
from dire.rules.registry import ordered_rules

app = Flask(__name__)
CORS(app)

log = get_logger(LogChannel.SYSTEM)


def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _options_from(data: dict) -> EnrichmentOptions:
    """
    Options from a request body.

    An explicit `options` map wins over `profile`; neither means every rule.
    """
    options = data.get("options")
    if options is not None:
        if not isinstance(options, dict):
            raise ValueError("'options' must be an object of rule id -> bool")
        return EnrichmentOptions.from_mapping(options)
    return build_options(data.get("profile", "all"))


def _documents_from(data: dict) -> list[TextDocument]:
    if "pages" in data:
        pages = data["pages"]
        if not isinstance(pages, list):
            raise ValueError("'pages' must be a list")
        return [TextDocument.model_validate(page) for page in pages]

    text = data.get("text")
    if not isinstance(text, str):
        raise ValueError("Provide 'text' or 'pages'")
    return [TextDocument(id="text", content=text)]


# =============================================================================
# API Routes
# =============================================================================

@app.route("/api/rules", methods=["GET"])
def get_rules():
    """Rules in the order they are applied."""
    return jsonify([{"id": rule.id.value, "description": rule.description} for rule in ordered_rules()])


@app.route("/api/groups", methods=["GET"])
def get_groups():
    """Group tree and the selection state a profile produces."""
    profile = request.args.get("profile", "all")
    tree = get_tree()
    try:
        selections = apply_profile(tree, load_profile(profile, tree))
    except FileNotFoundError:
        return _bad_request(f"Unknown profile: {profile}")
    except GroupConfigError as e:
        return _bad_request(str(e))

    return jsonify({
        "profile": profile,
        "profiles": list_profiles(),
        "state": all_state(tree, selections).value,
        "groups": [
            {
                "id": group.id,
                "label": group.label,
                "state": group_state(tree, selections, group.id).value,
                "children": [
                    {"id": child.value, "checked": selections.get(child, False)}
                    for child in group.children
                ],
            }
            for group in tree.groups
        ],
    })


@app.route("/api/enrich", methods=["POST"])
def enrich():
    """Enrich `text` or `pages` and return the batch result."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request("Expected a JSON object body")

    try:
        options = _options_from(data)
        documents = _documents_from(data)
    except FileNotFoundError:
        return _bad_request(f"Unknown profile: {data.get('profile')}")
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        return _bad_request(str(e))

    result = get_enricher().apply_all(documents, options)
    bind_request_context(request_id=result.run_id)
    try:
        log.info("enrich_request", documents=len(documents), changed=len(result.changed))
    finally:
        clear_request_context()
    return jsonify(result.model_dump(mode="json"))


if __name__ == "__main__":
    print("DIRE Web API starting...")
    print("   Open: http://localhost:5050")
    app.run(debug=True, port=5050, use_reloader=False)
