import os
from flask import Flask
import logging
from sqlalchemy.engine import make_url
from config import config
from .extensions import db, migrate, cors, apifairy, ma, cache


def _ensure_storage_dir(database_uri: str) -> None:
    url = make_url(database_uri)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)


def init_services(app: Flask) -> None:
    """
    Builds the cache, provider client, sync orchestrator, search service and
    scheduler once per application and registers them in app.extensions.
    """
    from .models.repository import PlanRepository
    from .services.cache import PlanCache
    from .services.provider_client import ProviderClient
    from .services.search import SearchService
    from .tasks.scheduler import PlanSyncScheduler
    from .tasks.sync import SyncOrchestrator

    def repository_factory() -> PlanRepository:
        return PlanRepository(db.session)

    plan_cache = PlanCache(app.extensions["cache"][cache])
    orchestrator = SyncOrchestrator(
        provider_client=ProviderClient(app.config["PROVIDER"]),
        cache=plan_cache,
        repository_factory=repository_factory,
    )
    search_service = SearchService(
        cache=plan_cache,
        repository_factory=repository_factory,
        search_timeout=app.config["CACHE_SEARCH_TTL"],
        stats_timeout=app.config["CACHE_STATS_TTL"],
    )
    scheduler = PlanSyncScheduler(app, orchestrator, plan_cache)

    app.extensions["plan_cache"] = plan_cache
    app.extensions["sync_orchestrator"] = orchestrator
    app.extensions["search_service"] = search_service
    app.extensions["plan_scheduler"] = scheduler

    if app.config.get("SCHEDULER_ENABLED"):
        scheduler.start()


def create_app(config_name: str | None = None):
    """Application factory."""

    if config_name is None:
        config_name = os.getenv("FLASK_CONFIG", "default")

    if config_name not in config:
        logging.warning(
            f"Configuration '{config_name}' not found. "
            f"Falling back to 'default' configuration."
        )
        config_name = "default"

    current_config_object = config[config_name]

    logging.basicConfig(
        level=current_config_object.LOG_LEVEL,
        format="[%(asctime)s.%(msecs)03d] [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    app = Flask(__name__)
    app.config.from_object(current_config_object)

    logging.getLogger(__name__).info(f"Flask app created with config: {config_name}")

    _ensure_storage_dir(app.config["SQLALCHEMY_DATABASE_URI"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, origins=app.config["CORS_ORIGINS"])
    cache.init_app(app)
    ma.init_app(app)  # Marshmallow before apifairy
    apifairy.init_app(app)

    # Register blueprints
    from .api import health_bp, plans_bp, admin_bp, errors_bp

    app.register_blueprint(errors_bp)
    app.register_blueprint(health_bp, url_prefix="/v1/health")
    app.register_blueprint(plans_bp, url_prefix="/v1/plans")
    app.register_blueprint(admin_bp, url_prefix="/v1/admin")

    init_services(app)
    return app
