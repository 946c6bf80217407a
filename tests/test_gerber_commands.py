"""Tests for Gerber command validation, the builder and the stringifier."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from circuit_fab.errors import SchemaValidationError
from circuit_fab.gerber import GERBER_COMMANDS, GerberBuilder, gerber_builder
from circuit_fab.gerber.commands import LoadRotation, PlotOperation
from circuit_fab.gerber.stringify import stringify_gerber_command, stringify_gerber_commands
from circuit_fab.gerber.templates import CircleTemplate, RectangleTemplate


def _render(name: str, **params: object) -> str:
    return stringify_gerber_commands(GerberBuilder().add(name, **params).build())


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------


class TestGerberBuilder:
    """Validating, fluent command accumulation."""

    def test_add_is_fluent_and_build_returns_tuple(self) -> None:
        builder = gerber_builder()
        result = builder.add("select_aperture", aperture_number=10).add("flash_operation", x=1, y=2)
        assert result is builder
        commands = builder.build()
        assert isinstance(commands, tuple)
        assert [c.command_code for c in commands] == ["D", "D03"]
        assert len(builder) == 2

    def test_unknown_command_name_raises(self) -> None:
        with pytest.raises(SchemaValidationError) as excinfo:
            gerber_builder().add("teleport", x=1)
        assert excinfo.value.command_name == "teleport"

    def test_invalid_parameters_carry_field_paths(self) -> None:
        with pytest.raises(SchemaValidationError) as excinfo:
            gerber_builder().add("select_aperture", aperture_number=9)
        assert excinfo.value.command_name == "select_aperture"
        assert excinfo.value.errors[0].startswith("aperture_number:")
        assert isinstance(excinfo.value.__cause__, ValidationError)

    def test_first_invalid_command_stops_the_builder(self) -> None:
        builder = gerber_builder().add("comment", comment="ok")
        with pytest.raises(SchemaValidationError):
            builder.add("move_operation", x=1)
        assert len(builder) == 1

    def test_extend_appends_validated_commands(self) -> None:
        source = gerber_builder().add("start_region_statement").add("end_region_statement").build()
        assert gerber_builder().extend(source).build() == source

    def test_every_name_maps_to_a_model_with_matching_code(self) -> None:
        for name, model in GERBER_COMMANDS.items():
            assert "command_code" in model.model_fields, name


# -----------------------------------------------------------------------------
# Validation rules
# -----------------------------------------------------------------------------


class TestCommandValidation:
    @pytest.mark.parametrize("value", [10000, -10000, float("nan"), float("inf")])
    def test_coordinates_must_fit_the_format(self, value: float) -> None:
        with pytest.raises(SchemaValidationError):
            gerber_builder().add("move_operation", x=value, y=0)

    @pytest.mark.parametrize("text", ["star*", "per%cent", "two\nlines"])
    def test_comment_rejects_delimiters(self, text: str) -> None:
        with pytest.raises(SchemaValidationError):
            gerber_builder().add("comment", comment=text)

    def test_arc_offsets_must_come_in_pairs(self) -> None:
        with pytest.raises(SchemaValidationError, match="together"):
            gerber_builder().add("plot_operation", x=1, y=1, i=0.5)

    def test_plot_arc_flag(self) -> None:
        assert PlotOperation(x=1, y=0, i=-0.5, j=0).is_arc
        assert not PlotOperation(x=1, y=0).is_arc

    def test_extra_fields_are_rejected(self) -> None:
        with pytest.raises(SchemaValidationError):
            gerber_builder().add("end_of_file", reason="done")

    def test_commands_are_frozen(self) -> None:
        command = LoadRotation(rotation_degrees=10)
        with pytest.raises(ValidationError):
            command.rotation_degrees = 20  # type: ignore[misc]


# -----------------------------------------------------------------------------
# Stringify
# -----------------------------------------------------------------------------


class TestStringify:
    """One line per command, exact RS-274X text."""

    @pytest.mark.parametrize(
        ("name", "params", "expected"),
        [
            ("comment", {"comment": "hello"}, "G04 hello*"),
            ("add_attribute_on_file", {"attribute_name": "FileFunction", "attribute_value": "Copper,L1,Top"},
             "%TF.FileFunction,Copper,L1,Top*%"),
            ("delete_attribute", {}, "%TD*%"),
            ("delete_attribute", {"attribute_name": "AperFunction"}, "%TD.AperFunction*%"),
            ("format_specification", {}, "%FSLAX46Y46*%"),
            ("set_unit", {"unit": "MM"}, "%MOMM*%"),
            ("set_layer_polarity", {"polarity": "D"}, "%LPD*%"),
            ("set_movement_mode_to_linear", {}, "G01*"),
            ("set_movement_mode_to_clockwise_circular", {}, "G02*"),
            ("set_movement_mode_to_counterclockwise_circular", {}, "G03*"),
            ("create_arc", {}, "G75*"),
            ("select_aperture", {"aperture_number": 12}, "D12*"),
            ("move_operation", {"x": 1.5, "y": -2}, "X1500000Y-2000000D02*"),
            ("plot_operation", {"x": 10, "y": 0}, "X10000000Y0D01*"),
            ("plot_operation", {"x": 1, "y": 0, "i": -0.5, "j": 0}, "X1000000Y0I-500000J0D01*"),
            ("flash_operation", {"x": 0, "y": 0.25}, "X0Y250000D03*"),
            ("start_region_statement", {}, "G36*"),
            ("end_region_statement", {}, "G37*"),
            ("load_rotation", {"rotation_degrees": 45}, "%LR45*%"),
            ("load_rotation", {"rotation_degrees": 22.5}, "%LR22.5*%"),
            ("load_rotation", {"rotation_degrees": 1e-07}, "%LR0.0000001*%"),
            ("end_of_file", {}, "M02*"),
        ],
    )
    def test_render(self, name: str, params: dict[str, object], expected: str) -> None:
        assert _render(name, **params) == expected

    def test_define_aperture(self) -> None:
        text = _render("define_aperture_template", aperture_number=10, template=CircleTemplate(diameter=0.1))
        assert text == "%ADD10C,0.100000*%"

    def test_define_aperture_from_mapping(self) -> None:
        text = _render(
            "define_aperture_template",
            aperture_number=11,
            template={"template_code": "R", "x_size": 1, "y_size": 0.5},
        )
        assert text == "%ADD11R,1.000000X0.500000*%"

    def test_define_macro(self) -> None:
        text = _render("define_macro_aperture_template", macro_name="DOT", template_code="1,1,$1,0,0*")
        assert text == "%AMDOT*\n1,1,$1,0,0*%"

    def test_lines_joined_with_newline(self) -> None:
        commands = (
            GerberBuilder()
            .add("select_aperture", aperture_number=10)
            .add("flash_operation", x=1, y=1)
            .add("end_of_file")
            .build()
        )
        assert stringify_gerber_commands(commands) == "D10*\nX1000000Y1000000D03*\nM02*"

    def test_deterministic(self) -> None:
        commands = GerberBuilder().add("define_aperture_template", aperture_number=10,
                                       template=RectangleTemplate(x_size=0.3, y_size=0.7)).build()
        assert stringify_gerber_commands(commands) == stringify_gerber_commands(commands)

    def test_non_command_raises(self) -> None:
        with pytest.raises(TypeError):
            stringify_gerber_command(CircleTemplate(diameter=1))  # type: ignore[arg-type]
