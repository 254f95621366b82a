"""Breach value type.

A Breach pairs the name of a property that failed validation with the
human-readable messages describing why.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict


class Breach(BaseModel):
    """One property's failure to meet a contract.

    Examples
    --------
    >>> breach = Breach(property="name", messages=["Field required"])
    >>> breach.property
    'name'
    >>> breach.messages
    ('Field required',)
    """

    model_config = ConfigDict(frozen=True)

    property: str
    messages: Tuple[str, ...]
    kind: str = "contract"

    def to_dict(self) -> Dict[str, List[str]]:
        return {self.property: list(self.messages)}


def breaches_from_messages(messages: Mapping[str, Sequence[str]], kind: str = "contract") -> List[Breach]:
    """Build one Breach per failed property, preserving the mapping's order.

    ``kind`` names the contract that was breached ("expectations" or "assurances").
    """
    return [
        Breach(property=prop, messages=tuple(msgs), kind=kind)
        for prop, msgs in messages.items()
    ]


def breaches_to_dict(breaches: Iterable[Breach]) -> Dict[str, List[str]]:
    """Collapse breaches into ``{property: messages}``.

    Handy as a failure payload: ``context.fail(errors=breaches_to_dict(breaches))``.
    """
    result = {}
    for breach in breaches:
        result.setdefault(breach.property, []).extend(breach.messages)
    return result
