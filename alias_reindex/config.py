# config.py
import logging
from dataclasses import dataclass
from typing import Optional

from elasticsearch import Elasticsearch

from alias_reindex.errors import ConfigurationError

# === Defaults ===
DEFAULT_SLICES = "auto"
DEFAULT_TARGET_SHARD_COUNT = -1   # -1 = keep the source index shard count
THROTTLE_DOCS_PER_SEC = -1        # -1 = no throttle

# === Logging Setup ===
logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    level=logging.INFO
)
logger = logging.getLogger("alias_reindex")


@dataclass(frozen=True)
class MigrationConfig:
    """Everything a single reindex run needs, built once from the CLI."""

    url: str
    alias: str = ""
    index: str = ""
    new_index: str = ""
    extra_alias: str = ""
    username: str = ""
    password: str = ""
    template_location: str = ""
    template_name: str = ""
    slices: str = DEFAULT_SLICES
    target_shard_count: int = DEFAULT_TARGET_SHARD_COUNT
    requests_per_second: int = THROTTLE_DOCS_PER_SEC
    request_timeout: Optional[float] = None
    verbose: bool = False

    def validate(self):
        """
        Source index/alias and url are mandatory inputs to continue.
        """
        if not self.alias and not self.index:
            raise ConfigurationError("either an alias or a source index is required")
        if not self.url:
            raise ConfigurationError("the cluster url is required")


def configure_logging(verbose=False):
    """Switch the package logger to DEBUG when verbose output is requested."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def create_client(config):
    """
    Build the Elasticsearch client for the configured cluster.

    Transport retries are switched off: every request is sent exactly once.
    Basic auth is only attached when both user name and password are set.
    """
    kwargs = {"max_retries": 0, "retry_on_status": (), "retry_on_timeout": False}
    if config.username and config.password:
        kwargs["basic_auth"] = (config.username, config.password)
    client = Elasticsearch(config.url, **kwargs)
    logger.debug("Elasticsearch client initialized for %s", config.url)
    return client
