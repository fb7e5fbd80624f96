"""Zero-downtime reindex of an Elasticsearch index behind an alias."""

__version__ = "0.1.0"
