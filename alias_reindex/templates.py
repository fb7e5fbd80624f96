# templates.py
import json
import os

from alias_reindex.config import logger


def template_name_for(template_location, template_name=""):
    """Configured name, or the template file name without its extension."""
    if template_name:
        return template_name
    return os.path.splitext(os.path.basename(template_location))[0]


def publish_index_template(cluster, template_location, template_name=""):
    """
    Publish the index template stored at template_location.

    Best-effort: a missing, relative, empty or rejected template is logged
    and False is returned; the migration goes on either way.
    """
    if not template_location:
        return False
    if not os.path.isabs(template_location):
        logger.warning("%s is not an absolute path. Please provide the absolute path of the template file",
                       template_location)
        return False

    try:
        with open(template_location, encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        logger.warning("❗ Could not read index template '%s': %s", template_location, e)
        return False
    if not raw.strip():
        logger.warning("Index template '%s' is empty, skipping", template_location)
        return False
    try:
        body = json.loads(raw)
    except ValueError as e:
        logger.warning("❗ Index template '%s' is not valid JSON: %s", template_location, e)
        return False

    name = template_name_for(template_location, template_name)
    resp = cluster.put_index_template(name, body)
    if not resp.ok:
        logger.warning("❗ Publishing index template '%s' failed (%s): %s", name, resp.status, resp.body)
        return False
    logger.info("📦 Published index template '%s' from %s", name, template_location)
    return True
