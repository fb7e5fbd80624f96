# errors.py


class MigrationError(Exception):
    """Base class for every fatal error raised while migrating an index."""


class ConfigurationError(MigrationError):
    """Mandatory inputs are missing."""


class ClusterResponseError(MigrationError):
    """
    A cluster call answered with a non-success status.

    :param message: Short description of the failed step.
    :param status: HTTP status of the response, None if no response arrived.
    :param body: Response body as returned by the cluster.
    """

    def __init__(self, message, status=None, body=None):
        super().__init__(message)
        self.status = status
        self.body = body

    def __str__(self):
        text = super().__str__()
        if self.body:
            text = f"{text}: {self.body}"
        return text


class AliasNotFoundError(ClusterResponseError):
    """The alias is not bound to any index."""


class IndexNotFoundError(ClusterResponseError):
    """Settings of the source index could not be read."""


class IndexCreationError(ClusterResponseError):
    """The destination index could not be created."""


class ReindexError(ClusterResponseError):
    """The reindex task failed or returned a non-success status."""


class AliasSwitchError(ClusterResponseError):
    """The atomic alias update was rejected."""
