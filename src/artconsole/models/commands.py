"""Models for commands sent to the device."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class CommandKind(StrEnum):
    """Command tags understood by the firmware."""
    GET_NET = "GET_NET"
    REBOOT = "REBOOT"
    SET_NET = "SET_NET"


class Command(BaseModel):
    """An outbound command: a kind tag plus its parameters."""

    kind: CommandKind
    params: dict[str, Any] = Field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        """JSON object sent on the wire, ``cmd`` first."""
        return {"cmd": self.kind.value, **self.params}


class NetworkSettings(BaseModel):
    """Values from the network settings form.

    Empty strings mean "leave unchanged on the device".
    """

    ssid: str = ""
    password: str = Field(default="", alias="pwd")
    ip: str = ""
    gateway: str = Field(default="", alias="gw")
    subnet_mask: str = Field(default="", alias="sn")

    model_config = {"populate_by_name": True}
