"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from .application.dependency_container import DependencyContainer
from .application.event_publisher import EventPublisher
from .application.lookup_service import LookupService
from .config.logging_config import configure_logging
from .config.settings import AppConfig, get_config
from .domain.events import DomainEvent
from .domain.lookup import LookupSessionRegistry
from .domain.video_processing import FormatClassifier, IdentifierResolver, IMetadataClient
from .infrastructure.event_handlers import LoggingEventHandler
from .infrastructure.rapidapi_metadata_client import RapidApiMetadataClient

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    metadata_client: Optional[IMetadataClient] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        metadata_client: Metadata client override, RapidAPI client if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = get_config()

    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["THUMBNAIL_PLACEHOLDER_URL"] = config.thumbnail_placeholder_url
    app.tubefetch_config = config

    CORS(
        app,
        resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
                "max_age": 3600,
            }
        },
    )

    missing = config.validate()
    if missing:
        logger.warning(
            f"Missing configuration: {', '.join(missing)}; the metadata service will reject lookups"
        )

    _initialize_services(app, config, metadata_client)
    _register_blueprints(app, config)
    _register_health_endpoint(app)

    return app


def _initialize_services(
    app: Flask,
    config: AppConfig,
    metadata_client: Optional[IMetadataClient],
) -> None:
    """
    Build the service graph and attach the container to the app.

    Args:
        app: Flask application
        config: Application configuration
        metadata_client: Optional metadata client override
    """
    container = DependencyContainer()

    if metadata_client is None:
        metadata_client = RapidApiMetadataClient(
            api_url=config.metadata_api_url,
            api_key=config.rapidapi_key,
            api_host=config.rapidapi_host,
            timeout=config.metadata_api_timeout,
        )
    container.register_singleton(IMetadataClient, metadata_client)

    event_publisher = EventPublisher()
    event_publisher.subscribe(
        DomainEvent, LoggingEventHandler(logging.getLogger("tubefetch.events")).handle
    )
    container.register_singleton(EventPublisher, event_publisher)

    resolver = IdentifierResolver()
    classifier = FormatClassifier()
    sessions = LookupSessionRegistry(max_sessions=config.max_sessions)
    container.register_singleton(IdentifierResolver, resolver)
    container.register_singleton(FormatClassifier, classifier)
    container.register_singleton(LookupSessionRegistry, sessions)

    lookup_service = LookupService(
        metadata_client=metadata_client,
        sessions=sessions,
        resolver=resolver,
        classifier=classifier,
        event_publisher=event_publisher,
    )
    container.register_singleton(LookupService, lookup_service)

    app.container = container
    logger.info(
        f"Application services initialized ({container.singleton_count()} singletons)"
    )


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
        config: Application configuration
    """
    from .api.v1 import api_v1_bp

    app.register_blueprint(api_v1_bp)

    logger.info(
        f"API {config.api_version} registered at /api/{config.api_version} "
        f"with Swagger UI at /api/{config.api_version}/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the application.

    The service is degraded when no metadata API credential is configured.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "metadata_api": "configured",
    }

    config = getattr(app, "tubefetch_config", None)
    if config is None or not config.has_api_key:
        health_status["metadata_api"] = "missing_api_key"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code
