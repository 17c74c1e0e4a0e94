#!/usr/bin/env python3
"""
Dashboard API
Serves the aggregated bundles, explorer queries, exports and plugin details as JSON
"""
from typing import Optional

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from config import (
    DASHBOARD_HOST,
    DASHBOARD_PORT,
    EXPORT_CSV_FILENAME,
    EXPORT_JSON_FILENAME,
    TOP_FAILING_RECIPES,
    TOP_RECIPES,
)
from utils import logger

from .export import rows_to_csv, rows_to_json
from .loader import BundleLoader, get_loader
from .queries import (
    filter_recipe_plugins,
    filter_rows,
    flatten_rows,
    get_plugin_by_name,
    migration_timeline,
    paginate,
    plugin_stats,
    recipe_display_name,
    sort_rows,
    sorted_migrations,
    top_failing_recipes,
    top_recipes,
)
from .recommendations import get_recommended_steps
from .topics import ALL_TOPICS, TOPICS, get_topic, recipes_by_topic, topic_for_recipe, topic_stats


def _explorer_rows(data):
    """Filtered and sorted explorer rows for the current request's query string"""
    rows = flatten_rows(data)
    rows = filter_rows(
        rows,
        search=request.args.get('search', ''),
        status=request.args.get('status', 'all'),
        pr=request.args.get('pr', 'all'),
    )
    return sort_rows(rows, key=request.args.get('sort', 'pluginName'), direction=request.args.get('dir', 'asc'))


def create_app(loader: Optional[BundleLoader] = None) -> Flask:
    """
    Build the Flask application

    Args:
        loader: Bundle loader to serve from (defaults to the process-wide one)
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    def current_loader() -> BundleLoader:
        return loader or get_loader()

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.route('/api/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        data = current_loader().load()
        return jsonify({
            "status": "ok",
            "plugins": len(data.plugins),
            "sampleData": current_loader().is_fallback,
        }), 200

    @app.route('/api/summary', methods=['GET'])
    def summary():
        data = current_loader().load()
        return jsonify({
            "summary": data.summary.to_dict(),
            "topFailingRecipes": top_failing_recipes(data, TOP_FAILING_RECIPES),
            "topRecipes": top_recipes(data, TOP_RECIPES),
            "sampleData": current_loader().is_fallback,
        })

    @app.route('/api/timeline', methods=['GET'])
    def timeline():
        return jsonify({"timeline": migration_timeline(current_loader().load())})

    @app.route('/api/topics', methods=['GET'])
    def topics():
        return jsonify({"topics": TOPICS})

    @app.route('/api/recipes', methods=['GET'])
    def recipes():
        """Recipes of a topic with the selected recipe's plugin applications"""
        data = current_loader().load()
        topic_id = request.args.get('topic', ALL_TOPICS)
        selected = request.args.get('recipe', '')
        topic_recipes = recipes_by_topic(data, topic_id)

        active = next((r for r in topic_recipes if r.recipe_id == selected), None) if selected else None
        if active is None and topic_recipes:
            active = topic_recipes[0]

        active_payload = None
        if active is not None:
            plugins = filter_recipe_plugins(
                active,
                search=request.args.get('search', ''),
                status=request.args.get('status', 'all'),
            )
            active_payload = {
                "recipeId": active.recipe_id,
                "name": recipe_display_name(active.recipe_id),
                "plugins": [p.to_dict() for p in plugins],
            }

        return jsonify({
            "topic": get_topic(topic_id),
            "stats": topic_stats(topic_recipes),
            "recipes": [
                {**r.to_dict(), "name": recipe_display_name(r.recipe_id), "topic": topic_for_recipe(r.recipe_id)}
                for r in topic_recipes
            ],
            "activeRecipe": active_payload,
        })

    @app.route('/api/plugins', methods=['GET'])
    def plugins():
        """Paginated data explorer rows"""
        data = current_loader().load()
        rows = _explorer_rows(data)
        page = paginate(rows, page=request.args.get('page', 0, type=int))
        payload = page.to_dict()
        if not rows:
            payload["message"] = "No rows match filters"
        return jsonify(payload)

    @app.route('/api/plugins/<plugin_name>', methods=['GET'])
    def plugin_detail(plugin_name):
        data = current_loader().load()
        plugin = get_plugin_by_name(data, plugin_name)
        if plugin is None:
            return jsonify({
                "error": "Plugin Not Found",
                "message": f'The plugin "{plugin_name}" was not found in the dataset.',
            }), 404
        return jsonify({
            "pluginName": plugin.plugin_name,
            "pluginRepository": plugin.plugin_repository,
            "stats": plugin_stats(plugin),
            "migrations": [
                {**m.to_dict(), "recipeName": recipe_display_name(m.migration_id)}
                for m in sorted_migrations(plugin)
            ],
            "recommendations": [s.to_dict() for s in get_recommended_steps(plugin)],
        })

    @app.route('/api/export.csv', methods=['GET'])
    def export_csv():
        rows = _explorer_rows(current_loader().load())
        return Response(
            rows_to_csv(rows),
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={EXPORT_CSV_FILENAME}'},
        )

    @app.route('/api/export.json', methods=['GET'])
    def export_json():
        rows = _explorer_rows(current_loader().load())
        return Response(
            rows_to_json(rows),
            mimetype='application/json',
            headers={'Content-Disposition': f'attachment; filename={EXPORT_JSON_FILENAME}'},
        )

    @app.route('/api/reload', methods=['POST'])
    def reload():
        """Drop the cached bundles; the next request loads them again"""
        current_loader().reset()
        logger.info("Bundle cache reset")
        return jsonify({"reset": True}), 200

    return app


def run():
    app = create_app()

    print("=" * 60)
    print("Plugin Modernizer Stats Dashboard API")
    print("=" * 60)
    print(f"API: http://localhost:{DASHBOARD_PORT}/api/summary")
    print(f"Data: {get_loader().base}")
    print("=" * 60)
    print("\nStarting server...")

    app.run(host=DASHBOARD_HOST, port=DASHBOARD_PORT)


if __name__ == '__main__':
    run()
