"""Pydantic models for the device state reported over the serial line."""

from __future__ import annotations

from pydantic import BaseModel, Field

SUMMARY_SEPARATOR = " | "

# Wire field name -> DeviceState attribute
WIRE_FIELDS: dict[str, str] = {
    "modeText": "mode_text",
    "sSub": "artnet_subnet",
    "sUni": "artnet_universe",
    "sChan": "artnet_channel",
    "ssid": "ssid",
    "ip": "ip",
    "gw": "gateway",
    "sn": "subnet_mask",
}


class DeviceState(BaseModel):
    """Last-known device state.

    Every field is independently optional: ``None`` means the device has
    not reported it. The password is deliberately not part of the model.
    """

    model_config = {"populate_by_name": True, "validate_assignment": True, "strict": True}

    mode_text: str | None = Field(default=None, alias="modeText")
    artnet_subnet: int | float | None = Field(default=None, alias="sSub")
    artnet_universe: int | float | None = Field(default=None, alias="sUni")
    artnet_channel: int | float | None = Field(default=None, alias="sChan")
    ssid: str | None = None
    ip: str | None = None
    gateway: str | None = Field(default=None, alias="gw")
    subnet_mask: str | None = Field(default=None, alias="sn")

    @property
    def present_fields(self) -> set[str]:
        """Attribute names that currently hold a value."""
        return {name for name in type(self).model_fields if getattr(self, name) is not None}

    @property
    def has_artnet(self) -> bool:
        return None not in (self.artnet_subnet, self.artnet_universe, self.artnet_channel)

    @property
    def has_network(self) -> bool:
        return None not in (self.ip, self.gateway, self.subnet_mask)

    def merge(self, report: DeviceState) -> set[str]:
        """Copy every present field of ``report`` into this snapshot.

        Returns:
            Names of the fields that were updated.
        """
        updated = report.present_fields
        for name in updated:
            setattr(self, name, getattr(report, name))
        return updated

    def summary(self) -> str:
        """One-line human-readable summary of the present fields."""
        parts: list[str] = []
        if self.mode_text is not None:
            parts.append(f"Mode: {self.mode_text}")
        if self.has_artnet:
            parts.append(
                f"Art-Net: Subnet {_fmt_number(self.artnet_subnet)}, "
                f"Universe {_fmt_number(self.artnet_universe)}, "
                f"Channel {_fmt_number(self.artnet_channel)}"
            )
        if self.ssid is not None:
            parts.append(f"Wi-Fi: {self.ssid}")
        if self.has_network:
            parts.append(f"IP: {self.ip}  GW: {self.gateway}  SN: {self.subnet_mask}")
        return SUMMARY_SEPARATOR.join(parts)


def _fmt_number(value: int | float | None) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
