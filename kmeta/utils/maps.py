from __future__ import annotations

from typing import Dict, Mapping, Optional


def merge_map(receiver: Optional[Dict[str, str]], giver: Optional[Mapping[str, str]]) -> None:
    """
    Copy every giver entry into receiver, overwriting existing values.

    receiver must already exist; unlike the inheritance functions this does
    not create a missing mapping. A missing receiver is only an error when
    there is something to write into it.
    """
    if not giver:
        return

    if receiver is None:
        raise TypeError("receiver must be a pre-allocated mapping")

    for key, value in giver.items():
        receiver[key] = value
