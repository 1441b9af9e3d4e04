# Environment variables
ENV_BASE_URL = "HTTPBIND_BASE_URL"
ENV_TIMEOUT = "HTTPBIND_TIMEOUT"
ENV_MAX_RETRIES = "HTTPBIND_MAX_RETRIES"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_DISPOSITION = "Content-Disposition"
HEADER_CONTENT_TRANSFER_ENCODING = "Content-Transfer-Encoding"
HEADER_RETRY_AFTER = "Retry-After"
HEADER_USER_AGENT = "User-Agent"

# Media types
MEDIA_TYPE_FORM = "application/x-www-form-urlencoded"
MEDIA_TYPE_MULTIPART_FORM = "multipart/form-data"
MEDIA_TYPE_JSON = "application/json; charset=utf-8"
MEDIA_TYPE_TEXT = "text/plain; charset=utf-8"
MEDIA_TYPE_OCTET_STREAM = "application/octet-stream"

DEFAULT_TRANSFER_ENCODING = "binary"
DOTENV_FILE = ".env"
