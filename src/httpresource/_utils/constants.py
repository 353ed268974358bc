# Environment variables
ENV_TIMEOUT = "HTTPRESOURCE_TIMEOUT"
ENV_PRIORITY = "HTTPRESOURCE_PRIORITY"
ENV_FOLLOW_REDIRECTS = "HTTPRESOURCE_FOLLOW_REDIRECTS"
ENV_DISABLE_SSL_VERIFY = "HTTPRESOURCE_DISABLE_SSL_VERIFY"

# Defaults
DEFAULT_TIMEOUT = 30.0
DOTENV_FILE = ".env"
LOGGER_NAME = "httpresource"

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_MULTIPART = "multipart/form-data"
CONTENT_TYPE_PNG = "image/png"

# Methods
METHODS = ("GET", "POST", "PUT", "DELETE", "HEAD")
BODY_METHODS = ("POST", "PUT")

TRUTHY_VALUES = ("1", "true", "yes", "on")
