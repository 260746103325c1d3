#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from pathlib import Path

from validate_yaml import load_schema, validate_workshop_file, main


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        schema = load_schema()
        assert "vehicles" in schema["properties"]
        assert "settings" in schema["properties"]


class TestValidateWorkshopFile:
    """Tests for validate_workshop_file function."""

    def test_valid_minimal_returns_no_errors(self, tmp_path):
        """Valid minimal workshop file returns empty error list."""
        path = tmp_path / "valid.yaml"
        path.write_text("""
settings:
  name: Taller Peter
  alertThresholds: [14, 7, 3, 1]

vehicles:
  - plate: 1234ABC
    make: Seat
    model: Ibiza
    year: 2015
    lastItvDate: '2023-01-10'
""")
        errors = validate_workshop_file(path, load_schema())
        assert errors == []

    def test_missing_plate_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - make: Seat
    model: Ibiza
    year: 2015
""")
        errors = validate_workshop_file(path, load_schema())
        assert len(errors) >= 1
        assert any("Schema validation" in e for e in errors)

    def test_negative_threshold_returns_errors(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
settings:
  alertThresholds: [7, -1]
vehicles: []
""")
        errors = validate_workshop_file(path, load_schema())
        assert any("Schema validation" in e for e in errors)
        assert any("alertThresholds" in e for e in errors)

    def test_unquoted_date_returns_errors(self, tmp_path):
        """Dates must be quoted strings."""
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - plate: 1234ABC
    make: Seat
    model: Ibiza
    lastItvDate: 2023-01-10
""")
        errors = validate_workshop_file(path, load_schema())
        assert len(errors) >= 1

    def test_impossible_date_returns_errors(self, tmp_path):
        """Dates must be real calendar days, not just YYYY-MM-DD shaped."""
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - plate: 1234ABC
    make: Seat
    model: Ibiza
    lastItvDate: '2024-02-30'
""")
        errors = validate_workshop_file(path, load_schema())
        assert any("2024-02-30" in e for e in errors)
        assert "  at path: vehicles.0.lastItvDate" in errors

    def test_reports_every_error(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("""
vehicles:
  - make: Seat
    model: Ibiza
  - plate: 5678DEF
    make: Renault
    model: Clio
    lastItvDate: '2023-13-01'
""")
        errors = validate_workshop_file(path, load_schema())
        assert len([e for e in errors if e.startswith("Schema validation")]) == 2
        assert "  at path: vehicles.1.lastItvDate" in errors

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("""
vehicles:
  - plate: [unclosed
""")
        errors = validate_workshop_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_workshop_file(tmp_path / "does_not_exist.yaml", load_schema())
        assert len(errors) >= 1
        assert any("Error" in e for e in errors)


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_bundled_workshop_file_is_valid(self):
        path = Path(__file__).parent.parent / "workshop.yaml"
        assert main([str(path)]) == 0

    def test_invalid_file_fails(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("vehicles: [{make: Seat}]\n")
        assert main([str(path)]) == 1
        assert "FAIL: bad.yaml" in capsys.readouterr().out
