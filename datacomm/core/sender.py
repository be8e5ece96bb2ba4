"""Multiplexing participants."""

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ConfigurationError


class Sender(BaseModel):
    """
    One station sharing the multiplexed channel.

    The same model feeds both schedulers: TDM reads ``payload`` and
    ``slots_per_frame``, FDM reads ``bandwidth`` and ``expression``.

    Attributes:
        id: Identifier used to route slots back to the right receive buffer.
        name: Display name. Empty means "Sender <id>".
        payload: Text the sender transmits over TDM.
        expression: Time-domain signal equation (e.g. ``"2sin(3t)"``) for FDM.
        color: Display color.
        slots_per_frame: Number of slots the sender is offered per TDM tick.
        bandwidth: Spectrum allocation for FDM, in Hz.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
    name: str = ""
    payload: str = ""
    expression: str = "sin(t)"
    color: str = "#00f0ff"
    slots_per_frame: int = Field(1, ge=1)
    bandwidth: float = Field(1000.0, ge=0)

    @property
    def display_name(self) -> str:
        return self.name or f"Sender {self.id}"


def check_unique_ids(senders: Sequence[Sender]) -> None:
    """
    Raises:
        ConfigurationError: If two senders share an id.
    """
    ids = [s.id for s in senders]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ConfigurationError(f"Sender ids must be unique, duplicated: {duplicates}")
