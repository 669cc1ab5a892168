#!/usr/bin/env python3
"""
Script di gestione per il backend Flask del bottin DAM.

Uso:
    python manage.py runserver      # Avvia il server di sviluppo
    python manage.py create-db      # Crea le tabelle del database MySQL
    python manage.py create-admin   # Crea/promuove l'account admin iniziale
"""

import argparse
import logging
import os

from sqlalchemy.exc import OperationalError as SAOperationalError
from pymysql.err import OperationalError as MySQLOperationalError

from bottin import create_app
from bottin.extensions import db
from config import DevConfig, ProdConfig

# ---------------------------------------------------------------------
# Logger CLI (fuori dal contesto Flask)
# ---------------------------------------------------------------------
cli_logger = logging.getLogger("manage_cli")
cli_logger.setLevel(logging.INFO)

if not cli_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    cli_logger.addHandler(handler)


CONFIGS = {
    "dev": DevConfig,
    "prod": ProdConfig,
}


# ---------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------
def _import_all_models() -> None:
    """Assicura che tutti i modelli siano registrati prima di create_all()."""
    import bottin.models  # noqa: F401


def _log_connection_hint(app) -> None:
    cli_logger.info(
        "Verifica che MySQL sia attivo e che l'utente '%s' abbia accesso al DB '%s'.",
        app.config.get("DB_USER"),
        app.config.get("DB_NAME"),
    )


# ---------------------------------------------------------------------
# Comandi
# ---------------------------------------------------------------------
def create_db(app) -> None:
    """Crea tutte le tabelle del database definite nei modelli SQLAlchemy."""
    with app.app_context():
        cli_logger.info("Tentativo di creare tutte le tabelle nel database...")
        try:
            _import_all_models()
            db.create_all()
            cli_logger.info("Database creato con successo.")
        except (SAOperationalError, MySQLOperationalError) as e:
            cli_logger.error("Errore di connessione o permessi MySQL: %s", e)
            _log_connection_hint(app)


def create_admin(app, username: str, password: str, email: str) -> None:
    """Crea l'account amministratore, o promuove quello esistente."""
    from bottin.services.auth_service import ensure_admin_account
    from bottin.storage import get_storage

    if not username or not password:
        cli_logger.error(
            "Username e password admin obbligatori (--username/--password "
            "oppure ADMIN_USERNAME/ADMIN_PASSWORD)."
        )
        return

    with app.app_context():
        try:
            user = ensure_admin_account(get_storage(), username, password, email)
            cli_logger.info("Account admin pronto: %s (id=%s)", user.username, user.id)
        except (SAOperationalError, MySQLOperationalError) as e:
            cli_logger.error("Errore di connessione o permessi MySQL: %s", e)
            _log_connection_hint(app)


def run_server(app) -> None:
    """Avvia il server di sviluppo Flask (LAN-ready)."""
    host = os.environ.get("FLASK_RUN_HOST", "0.0.0.0")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))
    debug = app.config.get("DEBUG", False)

    app.logger.info("Avvio del server su http://%s:%s", host, port)
    app.run(host=host, port=port, debug=debug)


# ---------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        description="Gestione del backend Flask del bottin DAM."
    )
    parser.add_argument(
        "command",
        choices=["runserver", "create-db", "create-admin"],
        help="Comando da eseguire.",
    )
    parser.add_argument(
        "--config",
        choices=sorted(CONFIGS),
        default=os.environ.get("BOTTIN_CONFIG", "dev"),
        help="Profilo di configurazione (default: dev).",
    )
    parser.add_argument("--username", default=os.environ.get("ADMIN_USERNAME"))
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"))
    parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL", "admin@dam.org"))

    args = parser.parse_args()

    app = create_app(CONFIGS[args.config])

    if args.command == "runserver":
        run_server(app)
    elif args.command == "create-db":
        create_db(app)
    elif args.command == "create-admin":
        create_admin(app, args.username, args.password, args.email)


if __name__ == "__main__":
    main()
