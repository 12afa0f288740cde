"""
This module contains the configuration settings for the Exhibitor web bootstrap.
It defines paths, property handling constants, web server settings and the
collaborators used to build the supervisor.
It is used throughout the application to ensure consistent settings and paths.
"""

import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv(override=True)

#* --- Core Paths ---
PACKAGE_DIR = pathlib.Path(__file__).resolve().parent
BASE_DIR = PACKAGE_DIR.parent  # Project Root
RESOURCES_DIR = PACKAGE_DIR / "resources"

#* --- Property Handling ---
# Only properties carrying this prefix become supervisor arguments.
OUR_PREFIX = "exhibitor-"
PROPERTIES_RESOURCE = "exhibitor.properties"
PROPERTIES_PATH = RESOURCES_DIR / PROPERTIES_RESOURCE
ARG_NAME_FORMAT = "-{}"

#* --- Web Server Settings ---
WEB_SERVER_HOST = os.getenv("EXHIBITOR_WEB_HOST", "0.0.0.0")
WEB_SERVER_PORT = int(os.getenv("EXHIBITOR_WEB_PORT", "8080"))
GRACEFUL_SHUTDOWN_TIMEOUT = int(os.getenv("EXHIBITOR_SHUTDOWN_TIMEOUT", "10"))  # seconds
STATUS_PATH = "/exhibitor/v1/bootstrap/status"

#* --- Collaborators ---
# Both use the "module:attr" syntax.
CREATOR_FACTORY = os.getenv(
    "EXHIBITOR_CREATOR_FACTORY", "exhibitor_web.local.supervisor.creator:ExhibitorCreator"
)
SUPERVISOR_FACTORY = os.getenv("EXHIBITOR_SUPERVISOR_FACTORY", "")

#* --- Application variables ---
VERBOSE_LOGGING = False
PROCESS_TITLE = "Exhibitor - Web Bootstrap"
LOG_FORMAT = '%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s'
