from __future__ import annotations
import logging
from typing import List, Mapping, Optional, Sequence, Tuple
from pydantic import BaseModel, ConfigDict

from basalt_visc.core.models import Sample

LOGGER = logging.getLogger(__name__)

Groups = Mapping[str, Sequence[Sample]]

def project_series(groups: Groups, signature: str) -> List[Sample]:
    """Samples of one group ordered by temperature (stable); [] for an unknown signature."""
    members = groups.get(signature) if signature else None
    if not members:
        return []
    return sorted(members, key=lambda s: s.temperature)

def representative(series: Sequence[Sample]) -> Optional[Sample]:
    """Source of the temperature-invariant fields (composition, label)."""
    return series[0] if series else None

def group_options(groups: Groups) -> List[Tuple[str, str]]:
    opts: List[Tuple[str, str]] = []
    for sig, members in groups.items():
        if not members:
            continue
        first = members[0]
        text = f"{first.id} - {first.label}" if first.label else f"Sample {first.id}"
        opts.append((sig, text))
    return opts

# -------------------------------
# Selection policy
# -------------------------------
class SelectionState(BaseModel):
    """Active group plus the token of the dataset it was chosen against."""
    model_config = ConfigDict(frozen=True)

    active: str = ""
    token: Optional[str] = None

def _first_key(groups: Groups) -> str:
    return next(iter(groups), "")

def reconcile_selection(state: SelectionState, groups: Groups, token: Optional[str]) -> SelectionState:
    """
    - New dataset token: always jump to the first group, even if the old
      signature still exists.
    - Same dataset: keep the active signature while it is still a key,
      otherwise fall back to the first group.
    """
    if token != state.token:
        return SelectionState(active=_first_key(groups), token=token)
    if state.active and state.active in groups:
        return state
    return SelectionState(active=_first_key(groups), token=token)

def select_group(state: SelectionState, groups: Groups, signature: str) -> SelectionState:
    if signature not in groups:
        LOGGER.debug("Ignoring selection of unknown group %s", signature)
        return state
    return state.model_copy(update={"active": signature})

def active_series(state: SelectionState, groups: Groups) -> List[Sample]:
    return project_series(groups, state.active)
