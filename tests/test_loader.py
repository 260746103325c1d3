#!/usr/bin/env python3
"""Tests for YAML loading and saving utilities."""

from datetime import date

import pytest
import yaml

from itv import (
    load_workshop,
    load_vehicles,
    load_settings,
    create_workshop,
    save_settings,
    add_vehicle,
    update_vehicle,
    delete_vehicle,
    save_last_itv_date,
    Vehicle,
    WorkshopSettings,
)

WORKSHOP_YAML = """
settings:
  name: Taller Peter
  phone: '600000000'
  alertThresholds: [1, 7, 3]

vehicles:
  - id: v1
    clientId: c1
    plate: 1234ABC
    make: Seat
    model: Ibiza
    year: 2015
    currentMileage: 128400
    lastItvDate: '2023-01-10'
  - id: v2
    plate: 5678DEF
    make: Renault
    model: Clio
    year: 2009
    isArchived: true
"""


@pytest.fixture
def workshop_file(tmp_path):
    path = tmp_path / "workshop.yaml"
    path.write_text(WORKSHOP_YAML)
    return path


# =============================================================================
# Loading
# =============================================================================


class TestLoadWorkshop:
    """Tests for load_workshop / load_vehicles / load_settings."""

    def test_loads_vehicles(self, workshop_file):
        vehicles = load_vehicles(workshop_file)

        assert len(vehicles) == 2
        assert all(isinstance(v, Vehicle) for v in vehicles)
        first = vehicles[0]
        assert first.id == "v1"
        assert first.client_id == "c1"
        assert first.plate == "1234ABC"
        assert first.year == 2015
        assert first.current_mileage == 128400
        assert first.last_itv_date == "2023-01-10"
        assert first.is_archived is False

    def test_archived_vehicles_included(self, workshop_file):
        vehicles = load_vehicles(workshop_file)
        assert vehicles[1].is_archived is True
        assert vehicles[1].last_itv_date is None

    def test_loads_settings(self, workshop_file):
        settings = load_settings(workshop_file)

        assert isinstance(settings, WorkshopSettings)
        assert settings.name == "Taller Peter"
        assert settings.phone == "600000000"
        assert settings.address == ""
        assert settings.alert_thresholds == [7, 3, 1]

    def test_missing_settings_defaults(self, tmp_path):
        path = tmp_path / "workshop.yaml"
        path.write_text("vehicles: []\n")

        workshop = load_workshop(path)

        assert workshop["vehicles"] == []
        assert workshop["settings"].alert_thresholds == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "workshop.yaml"
        path.write_text("")
        assert load_vehicles(path) == []

    def test_unquoted_date(self, tmp_path):
        """YAML dates are read back as ISO strings."""
        path = tmp_path / "workshop.yaml"
        path.write_text(
            "vehicles:\n"
            "  - plate: 1234ABC\n"
            "    make: Seat\n"
            "    model: Ibiza\n"
            "    year: 2015\n"
            "    lastItvDate: 2023-01-10\n"
        )
        vehicle = load_vehicles(path)[0]
        assert vehicle.last_itv_date == "2023-01-10"
        assert vehicle.itv_status(date(2023, 6, 1)).next_due_date == date(2025, 1, 10)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_vehicles(tmp_path / "missing.yaml")


# =============================================================================
# Saving
# =============================================================================


class TestCreateWorkshop:
    """Tests for create_workshop."""

    def test_creates_empty_workshop(self, tmp_path):
        path = tmp_path / "new.yaml"
        create_workshop(path, WorkshopSettings(name="Nuevo", alert_thresholds=[14, 7]))

        data = yaml.safe_load(path.read_text())
        assert data["vehicles"] == []
        assert data["settings"]["name"] == "Nuevo"
        assert data["settings"]["alertThresholds"] == [14, 7]


class TestSaveSettings:
    """Tests for save_settings."""

    def test_replaces_settings_keeps_vehicles(self, workshop_file):
        settings = load_settings(workshop_file)
        settings.add_threshold(30)
        settings.remove_threshold(1)

        save_settings(workshop_file, settings)

        assert load_settings(workshop_file).alert_thresholds == [30, 7, 3]
        assert len(load_vehicles(workshop_file)) == 2


class TestAddVehicle:
    """Tests for add_vehicle."""

    def test_appends_vehicle(self, workshop_file):
        add_vehicle(
            workshop_file,
            Vehicle("9012GHJ", "Toyota", "Corolla", 2023, id="v3"),
        )

        vehicles = load_vehicles(workshop_file)
        assert [v.id for v in vehicles] == ["v1", "v2", "v3"]
        assert vehicles[2].plate == "9012GHJ"

    def test_omits_empty_fields(self, workshop_file):
        add_vehicle(workshop_file, Vehicle("9012GHJ", "Toyota", "Corolla", 2023, id="v3"))

        data = yaml.safe_load(workshop_file.read_text())
        assert data["vehicles"][2] == {
            "id": "v3",
            "plate": "9012GHJ",
            "make": "Toyota",
            "model": "Corolla",
            "year": 2023,
        }

    def test_date_object_written_as_iso_string(self, workshop_file):
        add_vehicle(
            workshop_file,
            Vehicle("9012GHJ", "Toyota", "Corolla", 2015, date(2024, 5, 2), id="v3"),
        )
        data = yaml.safe_load(workshop_file.read_text())
        assert data["vehicles"][2]["lastItvDate"] == "2024-05-02"

    def test_creates_vehicles_list(self, tmp_path):
        path = tmp_path / "workshop.yaml"
        path.write_text("settings:\n  name: Taller\n")
        add_vehicle(path, Vehicle("1234ABC", "Seat", "Ibiza", 2015, id="v1"))
        assert [v.id for v in load_vehicles(path)] == ["v1"]


class TestUpdateVehicle:
    """Tests for update_vehicle."""

    def test_replaces_by_id(self, workshop_file):
        vehicle = load_vehicles(workshop_file)[0]
        vehicle.current_mileage = 130000
        vehicle.is_archived = True

        update_vehicle(workshop_file, vehicle)

        reloaded = load_vehicles(workshop_file)[0]
        assert reloaded.current_mileage == 130000
        assert reloaded.is_archived is True

    def test_unknown_id_raises(self, workshop_file):
        with pytest.raises(KeyError):
            update_vehicle(workshop_file, Vehicle("X", "Y", "Z", 2015, id="nope"))


class TestDeleteVehicle:
    """Tests for delete_vehicle."""

    def test_removes_by_id(self, workshop_file):
        delete_vehicle(workshop_file, "v1")
        assert [v.id for v in load_vehicles(workshop_file)] == ["v2"]

    def test_unknown_id_raises(self, workshop_file):
        with pytest.raises(KeyError):
            delete_vehicle(workshop_file, "nope")


class TestSaveLastItvDate:
    """Tests for save_last_itv_date."""

    def test_string_date(self, workshop_file):
        save_last_itv_date(workshop_file, "v2", "2025-02-03")
        assert load_vehicles(workshop_file)[1].last_itv_date == "2025-02-03"

    def test_date_object(self, workshop_file):
        save_last_itv_date(workshop_file, "v1", date(2025, 1, 9))
        assert load_vehicles(workshop_file)[0].last_itv_date == "2025-01-09"

    def test_unknown_id_raises(self, workshop_file):
        with pytest.raises(KeyError):
            save_last_itv_date(workshop_file, "nope", "2025-01-09")
