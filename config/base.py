# config.py
import os


def _coerce_bool(value, default=False):
    """Convert environment-style truthy/falsey values to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value_str = str(value).strip().lower()
    if value_str in {"1", "true", "yes", "on"}:
        return True
    if value_str in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_email_list(value):
    """
    Parse a comma-separated email list while keeping order and removing duplicates.

    Returns:
        tuple[str, ...]: Email addresses exactly as written (case preserved).
    """
    if not value:
        return ()

    seen = set()
    emails = []
    for raw_item in value.split(","):
        item = raw_item.strip()
        if not item or item in seen:
            continue
        seen.add(item)
        emails.append(item)
    return tuple(emails)


def _normalize_postgres_uri(uri):
    if uri and uri.startswith("postgres://"):
        return uri.replace("postgres://", "postgresql://", 1)
    return uri


class Config:
    _flask_env = os.environ.get("FLASK_ENV", "development")

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Legacy migration configuration
    LEGACY_DATABASE_URL = os.environ.get("LEGACY_DATABASE_URL")
    MIGRATION_EXCEPTIONS_PATH = os.environ.get("MIGRATION_EXCEPTIONS_PATH")
    try:
        LEGACY_UTC_OFFSET_HOURS = int(os.environ.get("LEGACY_UTC_OFFSET_HOURS", "-5"))
    except ValueError:
        LEGACY_UTC_OFFSET_HOURS = -5
    MIGRATION_ADMIN_EMAILS = _parse_email_list(
        os.environ.get("MIGRATION_ADMIN_EMAILS", "gardens@southernexposure.com")
    )
    MIGRATION_METRICS_ENABLED = _coerce_bool(os.environ.get("MIGRATION_METRICS_ENABLED"), default=True)


class DevelopmentConfig(Config):
    DEBUG = True
    # Get the project root directory (parent of config directory)
    _config_dir = os.path.dirname(os.path.abspath(__file__))
    _project_root = os.path.dirname(_config_dir)
    instance_path = os.path.join(_project_root, "instance")

    # Ensure instance folder exists
    if not os.path.exists(instance_path):
        os.makedirs(instance_path, exist_ok=True)

    # Use absolute path for SQLite - Windows needs forward slashes in URI
    db_path = os.path.join(instance_path, "storefront_dev.db")
    db_path_normalized = db_path.replace("\\", "/")
    db_uri = f"sqlite:///{db_path_normalized}"

    SQLALCHEMY_DATABASE_URI = _normalize_postgres_uri(os.environ.get("DATABASE_URL", db_uri))
    SQLALCHEMY_ECHO = False
    if SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": 5,
            }
        }
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {}


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "test-secret-key-for-testing-only")
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"  # In-memory database for testing
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {
            "check_same_thread": False,
            "timeout": 5,
        }
    }
    LEGACY_DATABASE_URL = None
    MIGRATION_EXCEPTIONS_PATH = None
    MIGRATION_METRICS_ENABLED = False


class ProductionConfig(Config):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = _normalize_postgres_uri(os.environ.get("DATABASE_URL"))
    SQLALCHEMY_ECHO = False
