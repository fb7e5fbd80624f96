# alias_utils.py
from alias_reindex.config import logger
from alias_reindex.errors import AliasSwitchError
from alias_reindex.models import AliasBinding


def switch_alias(cluster, alias_name, extra_alias_name, current_index, new_index):
    """
    Move the alias (and the extra alias, if any) from current_index to new_index.

    All remove/add actions go out in one Update Aliases request, which the
    cluster applies as a unit: readers never see the alias unbound.
    Without an alias name there is nothing to switch and None is returned.

    :raises AliasSwitchError: if the cluster rejects the update.
    """
    if not alias_name:
        logger.debug("No alias name defined.")
        return None

    binding = AliasBinding(
        alias_name=alias_name,
        current_index=current_index,
        new_index=new_index,
        extra_alias_name=extra_alias_name,
    )
    resp = cluster.update_aliases(binding.actions())
    if not resp.ok:
        raise AliasSwitchError(
            f"switching aliases {binding.aliases()} from '{current_index}' to '{new_index}' failed",
            resp.status, resp.body
        )
    logger.info("🔗 Switched aliases %s from '%s' to '%s'",
                binding.aliases(), current_index, new_index)
    return binding
