import os
import ssl
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .._config import Config

# Checked in order for an explicit CA bundle file
CA_FILE_ENV_VARS = ("SSL_CERT_FILE", "REQUESTS_CA_BUNDLE")
CA_DIR_ENV_VAR = "SSL_CERT_DIR"


def expand_path(path):
    """Expand environment variables and user home directory in path."""
    if not path:
        return path
    # Expand environment variables like $HOME, then the user home directory ~
    return os.path.expanduser(os.path.expandvars(path))


def ca_bundle() -> str:
    """CA file named by the environment, or certifi's bundle."""
    import certifi

    for name in CA_FILE_ENV_VARS:
        path = expand_path(os.environ.get(name))
        if path:
            return path
    return certifi.where()


def create_ssl_context() -> ssl.SSLContext:
    # Try truststore first (system certificates)
    try:
        import truststore

        return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    except ImportError:
        # Fallback to manual certificate configuration
        return ssl.create_default_context(
            cafile=ca_bundle(),
            capath=expand_path(os.environ.get(CA_DIR_ENV_VAR)),
        )


def get_httpx_client_kwargs(config: "Config") -> dict[str, Any]:
    """Keyword arguments for the ``httpx.Client`` that performs a dispatch."""
    return {
        "follow_redirects": config.follow_redirects,
        "timeout": config.timeout,
        "verify": False if config.disable_ssl_verify else create_ssl_context(),
    }
