"""Constants used throughout the ONgDB container helper."""


# Image defaults
DEFAULT_IMAGE_NAME = "graphfoundation/ongdb"
DEFAULT_TAG = "3.6.0"
DEFAULT_IMAGE = f"{DEFAULT_IMAGE_NAME}:{DEFAULT_TAG}"

# Ports exposed by the image
BOLT_PORT = 7687
HTTP_PORT = 7474
HTTPS_PORT = 7473
EXPOSED_PORTS = (BOLT_PORT, HTTP_PORT, HTTPS_PORT)

# Authentication
ADMIN_USER = "neo4j"
DEFAULT_ADMIN_PASSWORD = "password"
AUTH_FORMAT = ADMIN_USER + "/{}"
NO_AUTH = "none"
AUTH_ENV_KEY = "NEO4J_AUTH"

# Configuration keys are passed to the entrypoint as NEO4J_* variables
CONFIG_KEY_PREFIX = "NEO4J_"

# Destinations inside the container
DATABASE_PATH = "/data/databases/graph.db"
PLUGINS_PATH = "/var/lib/neo4j/plugins/"

# Startup banner printed once the Bolt connector is listening
BOLT_READY_PATTERN = rf"Bolt enabled on 0\.0\.0\.0:{BOLT_PORT}\.\n"

# Timeout values (seconds)
STARTUP_TIMEOUT = 120  # 2 minutes
POLL_INTERVAL = 0.5
HTTP_REQUEST_TIMEOUT = 5
SOCKET_TIMEOUT = 1

# Container labelling and local settings
CONTAINER_LABEL = "ongdb-container"
DATA_DIR_NAME = ".ongdb-container"
CONFIG_FILE_NAME = "container_config.json"

# Environment overrides for stored settings
ENV_IMAGE = "ONGDB_CONTAINER_IMAGE"
ENV_PASSWORD = "ONGDB_CONTAINER_PASSWORD"
ENV_STARTUP_TIMEOUT = "ONGDB_CONTAINER_STARTUP_TIMEOUT"
