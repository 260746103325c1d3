"""YAML loading and saving utilities for workshop data."""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .settings import WorkshopSettings
from .vehicle import Vehicle


def _parse_object(dct: Dict[str, Any]) -> Union[Vehicle, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle object (inside 'vehicles' list)
    if "plate" in dct:
        return Vehicle(
            dct["plate"],
            dct.get("make", ""),
            dct.get("model", ""),
            dct.get("year"),
            dct.get("lastItvDate"),
            dct.get("id"),
            dct.get("clientId"),
            dct.get("currentMileage"),
            dct.get("isArchived"),
        )
    # Top-level workshop object
    elif "vehicles" in dct or "settings" in dct:
        settings = dct.get("settings") or {}
        return {
            "settings": WorkshopSettings(
                settings.get("name"),
                settings.get("address"),
                settings.get("phone"),
                settings.get("email"),
                settings.get("website"),
                settings.get("alertThresholds"),
            ),
            "vehicles": dct.get("vehicles") or [],
        }
    else:
        return dct


def _read_raw(filename: Union[str, Path]) -> Dict[str, Any]:
    """Load the raw YAML data (not parsed into objects)."""
    with open(filename, "r") as fp:
        return yaml.load(fp, Loader=yaml.SafeLoader) or {}


def _write_raw(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": vehicle.id,
        "plate": vehicle.plate,
        "make": vehicle.make,
        "model": vehicle.model,
    }
    if vehicle.year is not None:
        d["year"] = vehicle.year
    if vehicle.client_id is not None:
        d["clientId"] = vehicle.client_id
    if vehicle.current_mileage is not None:
        d["currentMileage"] = vehicle.current_mileage
    if vehicle.last_itv_date is not None:
        last = vehicle.last_itv_date
        d["lastItvDate"] = last.isoformat() if isinstance(last, date) else str(last)
    if vehicle.is_archived:
        d["isArchived"] = True
    return d


def _settings_to_dict(settings: WorkshopSettings) -> Dict[str, Any]:
    """Serialize WorkshopSettings to the YAML dict format (camelCase keys)."""
    return {
        "name": settings.name,
        "address": settings.address,
        "phone": settings.phone,
        "email": settings.email,
        "website": settings.website,
        "alertThresholds": list(settings.alert_thresholds),
    }


def _find_vehicle_index(data: Dict[str, Any], vehicle_id: str) -> int:
    vehicles = data.get("vehicles") or []
    for index, raw in enumerate(vehicles):
        if raw.get("id") == vehicle_id:
            return index
    raise KeyError(f"Vehicle '{vehicle_id}' not found")


def load_workshop(filename: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a workshop file.

    Returns {"settings": WorkshopSettings, "vehicles": [Vehicle, ...]}.
    """
    with open(filename, "rb") as fp:
        raw = yaml.load(fp, Loader=yaml.SafeLoader) or {"vehicles": []}
    # Unquoted YAML dates come back as date objects
    json_data = json.dumps(raw, indent=4, default=str)
    return json.loads(json_data, object_hook=_parse_object)


def load_vehicles(filename: Union[str, Path]) -> list:
    """All vehicles in a workshop file, archived ones included."""
    return load_workshop(filename)["vehicles"]


def load_settings(filename: Union[str, Path]) -> WorkshopSettings:
    """Workshop settings, defaults when the file has none."""
    return load_workshop(filename)["settings"]


def create_workshop(filename: Union[str, Path], settings: WorkshopSettings) -> None:
    """Create a new workshop YAML file with no vehicles."""
    _write_raw(filename, {"settings": _settings_to_dict(settings), "vehicles": []})


def save_settings(filename: Union[str, Path], settings: WorkshopSettings) -> None:
    """Replace the settings section, leaving vehicles unchanged."""
    data = _read_raw(filename)
    data["settings"] = _settings_to_dict(settings)
    if data.get("vehicles") is None:
        data["vehicles"] = []
    _write_raw(filename, data)


def add_vehicle(filename: Union[str, Path], vehicle: Vehicle) -> None:
    """Append a vehicle to a workshop YAML file."""
    data = _read_raw(filename)
    if data.get("vehicles") is None:
        data["vehicles"] = []
    data["vehicles"].append(_vehicle_to_dict(vehicle))
    _write_raw(filename, data)


def update_vehicle(filename: Union[str, Path], vehicle: Vehicle) -> None:
    """Replace the stored vehicle with the same id."""
    data = _read_raw(filename)
    index = _find_vehicle_index(data, vehicle.id)
    data["vehicles"][index] = _vehicle_to_dict(vehicle)
    _write_raw(filename, data)


def delete_vehicle(filename: Union[str, Path], vehicle_id: str) -> None:
    """Remove the vehicle with the given id."""
    data = _read_raw(filename)
    index = _find_vehicle_index(data, vehicle_id)
    del data["vehicles"][index]
    _write_raw(filename, data)


def save_last_itv_date(
    filename: Union[str, Path], vehicle_id: str, itv_date: Union[str, date]
) -> None:
    """Record the date of a vehicle's latest inspection."""
    data = _read_raw(filename)
    index = _find_vehicle_index(data, vehicle_id)
    if isinstance(itv_date, date):
        itv_date = itv_date.isoformat()
    data["vehicles"][index]["lastItvDate"] = itv_date
    _write_raw(filename, data)
