import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO"):
    """Configura el logging raíz de la aplicación (una sola vez por proceso)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # el engine de SQLAlchemy es demasiado verboso en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
