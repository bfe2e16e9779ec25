import os
import logging
import azure.functions as func

from src.function_blueprints.http_export import bp as export_bp
from src.function_blueprints.http_health import bp as health_bp
from src.function_blueprints.http_project_item import bp as project_item_bp
from src.function_blueprints.http_projects import bp as projects_bp

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


def _configure_logging() -> None:
    lvl = (os.getenv("AZURE_SDK_LOG_LEVEL") or "").upper()
    if lvl:
        level = getattr(logging, lvl, logging.INFO)
        logging.getLogger("azure").setLevel(level)
        logging.getLogger("azure.cosmos").setLevel(level)
    logging.getLogger("contentcalendar").setLevel(logging.INFO)


_configure_logging()

app.register_functions(projects_bp)
app.register_functions(project_item_bp)
app.register_functions(export_bp)
app.register_functions(health_bp)
