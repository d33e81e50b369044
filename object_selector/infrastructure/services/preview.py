"""Built-in preview callback for post settings in a customization session.

Settings are named ``post[<post_type>][<post_id>]`` and hold the edited
post fields. Only fields a preview may override are taken; anything else in
the value is ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from object_selector.application.services.hooks import OVERRIDABLE_POST_FIELDS

if TYPE_CHECKING:
    from object_selector.application.services.hooks import PreviewState

logger = logging.getLogger(__name__)

POST_SETTING_ID_RE = re.compile(r"^post\[(?P<post_type>[^\[\]]+)\]\[(?P<post_id>\d+)\]$")

_INT_FIELDS = frozenset({"post_parent", "menu_order"})


def _coerce_fields(value: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for name in OVERRIDABLE_POST_FIELDS:
        if name not in value:
            continue
        if name in _INT_FIELDS:
            try:
                fields[name] = int(value[name])
            except (TypeError, ValueError):
                continue
        else:
            fields[name] = str(value[name])
    return fields


def preview_post_settings(state: PreviewState, customized: Mapping[str, Any]) -> None:
    """Record overrides for every ``post[<type>][<id>]`` setting in customized."""
    for setting_id, value in customized.items():
        match = POST_SETTING_ID_RE.match(str(setting_id))
        if match is None or not isinstance(value, Mapping):
            continue
        fields = _coerce_fields(value)
        if fields:
            state.set_post_override(int(match.group("post_id")), fields)
            logger.debug("Previewing post setting %s", setting_id)
