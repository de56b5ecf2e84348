"""Decoding of JSON state reports into ``DeviceState``."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from artconsole.models.state import WIRE_FIELDS, DeviceState
from artconsole.utils.logging import get_logger

logger = get_logger(__name__)

# Wire fields mirrored into the editable network form, by form field name.
# The password is never filled from device state.
FORM_FIELDS: dict[str, str] = {
    "ssid": "ssid",
    "ip": "ip",
    "gw": "gateway",
    "sn": "subnet_mask",
}


def decode_state(payload: dict[str, Any]) -> DeviceState:
    """Build a partial ``DeviceState`` from a parsed report.

    Unknown keys are ignored. Each recognized key is validated on its own:
    a null, empty or wrongly typed value is dropped and the rest of the
    report still applies.
    """
    accepted: dict[str, Any] = {}
    for wire_name in WIRE_FIELDS:
        value = payload.get(wire_name)
        if value is None or (wire_name == "modeText" and value == ""):
            continue
        try:
            DeviceState.model_validate({wire_name: value})
        except ValidationError:
            logger.debug("state_field_ignored", field=wire_name, value=repr(value))
            continue
        accepted[wire_name] = value
    return DeviceState.model_validate(accepted)


def form_values(report: DeviceState) -> dict[str, str]:
    """Form field values carried by a report, keyed by form field name."""
    values: dict[str, str] = {}
    for form_name, attr in FORM_FIELDS.items():
        value = getattr(report, attr)
        if value is not None:
            values[form_name] = value
    return values
