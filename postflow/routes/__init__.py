from ..resources import (
    blp_users,
    blp_posts,
    blp_tags,
)


def register_routes(app, api):
    blueprints = [
        blp_users,
        blp_posts,
        blp_tags,
    ]

    for blueprint in blueprints:
        api.register_blueprint(blueprint, url_prefix="/api")

    # Root route (liveness)
    @app.route('/')
    def index():
        return "PostFlow server running..", 200, {"Content-Type": "text/plain; charset=utf-8"}
