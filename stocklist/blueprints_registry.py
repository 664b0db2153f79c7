import logging

logger = logging.getLogger(__name__)


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    from stocklist.blueprints.inventory import inventory_bp

    blueprints = [
        (inventory_bp, None, 'Inventory'),
    ]

    for blueprint, url_prefix, description in blueprints:
        if url_prefix:
            app.register_blueprint(blueprint, url_prefix=url_prefix)
        else:
            app.register_blueprint(blueprint)
        logger.debug("Registered blueprint: %s", description)
