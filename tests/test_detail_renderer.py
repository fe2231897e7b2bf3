from __future__ import annotations

from analysis.kinds import ArrayType, Ident, RecordKind, Usage
from analysis.records import (
    ArgumentRecord,
    ArrayDimRecord,
    FunctionRecord,
    TagRecord,
    VariableRecord,
)
from symbols.detail import DetailRenderer
from symbols.model import (
    Argument,
    ArrayDim,
    Constant,
    DefaultReference,
    Enumerator,
    EnumeratorField,
    Function,
    Substitution,
    Variable,
)
from symbols.table import SymbolTable, TableBuilder


def _render(symbol: object, table: SymbolTable | None = None) -> str:
    return DetailRenderer(table or SymbolTable()).render(symbol)  # type: ignore[arg-type]


def test_integer_array_variable() -> None:
    variable = Variable(
        name="x", ident=Ident.ARRAY, dims=(ArrayDim(ArrayType.INTEGER, 5),)
    )

    assert _render(variable) == "new x[5]"


def test_const_native_function_with_untagged_argument() -> None:
    function = Function(
        name="Foo",
        ident=Ident.FUNCTION,
        usage=Usage.NATIVE | Usage.CONST,
        arguments=(Argument(name="a", ident=Ident.VARIABLE),),
    )

    assert _render(function) == "native Foo(a)"


def test_rendering_is_idempotent(table: SymbolTable) -> None:
    renderer = DetailRenderer(table)

    for symbol in table.all_symbols():
        assert renderer.render(symbol) == renderer.render(symbol)


def test_non_native_function_is_forward() -> None:
    function = Function(name="OnInit", ident=Ident.FUNCTION, usage=Usage.PUBLIC)

    assert _render(function) == "forward OnInit()"


def test_file_scoped_symbols_are_static() -> None:
    variable = Variable(name="sCount", ident=Ident.VARIABLE, file_scope=2)
    constant = Constant(name="LIMIT", ident=Ident.CONSTEXPR, file_scope=2, value=3)

    assert _render(variable) == "static new sCount"
    assert _render(constant) == "static LIMIT"


def test_reference_argument() -> None:
    argument = Argument(name="value", ident=Ident.REFERENCE)

    assert _render(argument) == "&value"


def test_reference_array_renders_empty_brackets() -> None:
    argument = Argument(name="grid", ident=Ident.REFARRAY, dimension=2)
    variable = Variable(
        name="buffer",
        ident=Ident.REFARRAY,
        dims=(ArrayDim(ArrayType.INTEGER, 16),),
    )

    assert _render(argument) == "grid[][]"
    assert _render(variable) == "buffer[]"


def test_fixture_details(table: SymbolTable) -> None:
    details = {symbol.name: symbol.detail for symbol in table.all_symbols()}

    assert details["SetPlayerHealth"] == (
        "native SetPlayerHealth(playerid, Float: health)"
    )
    assert details["SendMessage"] == (
        "forward stock SendMessage(playerid, const message[], bool: broadcast = false)"
    )
    assert details["gPlayerData"] == "static new gPlayerData[500][E_PLAYER]"
    assert details["gCounter"] == "new gCounter"
    assert details["true"] == "bool: true"
    assert details["LOCAL_LIMIT"] == "static LOCAL_LIMIT"


def test_enumerator_body(table: SymbolTable) -> None:
    (enumerator,) = table.enumerators

    assert enumerator.detail == (
        "enum E_PLAYER\n"
        "{\n"
        "\tE_PLAYER: E_PLAYER_NAME[24],\n"
        "\tE_PLAYER: E_PLAYER_SCORE,\n"
        "\tFloat: E_PLAYER_HEALTH\n"
        "}"
    )
    assert enumerator.fields[2].detail == "Float: E_PLAYER_HEALTH"


def test_enumerator_without_fields_renders_header() -> None:
    assert _render(Enumerator(name="E_EMPTY", ident=Ident.CONSTEXPR)) == "enum E_EMPTY"


def test_enumerator_field_size_one_has_no_suffix() -> None:
    enum_field = EnumeratorField(
        name="E_FLAG",
        ident=Ident.CONSTEXPR,
        usage=Usage.ENUMFIELD,
        dims=(ArrayDim(ArrayType.INTEGER, 1),),
    )

    assert _render(enum_field) == "E_FLAG"


def test_stock_bit_is_not_a_keyword_for_enumerator_fields() -> None:
    enum_field = EnumeratorField(name="E_A", ident=Ident.CONSTEXPR, usage=Usage.ENUMFIELD)
    variable = Variable(name="v", ident=Ident.VARIABLE, usage=Usage.STOCK)

    assert _render(enum_field) == "E_A"
    assert _render(variable) == "stock new v"


def test_multiple_argument_tags() -> None:
    builder = TableBuilder()
    builder.ingest(
        RecordKind.TAGS,
        [TagRecord(name="Float", value=2), TagRecord(name="bool", value=1)],
    )
    builder.ingest(
        RecordKind.FUNCTIONS,
        [
            FunctionRecord(
                name="Print",
                usage=Usage.NATIVE.value,
                argument=[
                    ArgumentRecord(name="value", tag_list=[2, 1]),
                    ArgumentRecord(name="other", tag_list=[7, 8]),
                ],
            )
        ],
    )

    table = builder.build()

    assert table.functions[0].detail == "native Print({Float, bool}: value, other)"


def test_default_values() -> None:
    empty = Argument(
        name="text", ident=Ident.REFARRAY, dimension=1, has_default=True, default_value=""
    )
    number = Argument(name="ratio", ident=Ident.VARIABLE, has_default=True, default_value=2.0)
    literal = Argument(
        name="mode", ident=Ident.VARIABLE, has_default=True, default_value=3,
        reference=DefaultReference(tag_id=9, value=3),
    )

    assert _render(empty) == 'text[] = ""'
    assert _render(number) == "ratio = 2"
    assert _render(literal) == "mode = 3"


def test_new_tag_fixes_earlier_details() -> None:
    builder = TableBuilder()
    builder.ingest(
        RecordKind.VARIABLES, [VariableRecord(name="gHealth", tagid=2)]
    )
    first = builder.build()
    assert first.variables[0].detail == "new gHealth"

    builder.ingest(RecordKind.TAGS, [TagRecord(name="Float", value=2)])
    second = builder.build()

    assert second.variables[0].detail == "new Float: gHealth"


def test_enumerator_dimension_resolves_by_tag(table: SymbolTable) -> None:
    variable = Variable(
        name="data",
        ident=Ident.ARRAY,
        dims=(ArrayDim(ArrayType.ENUMERATOR, 3), ArrayDim(ArrayType.ENUMERATOR, 99)),
    )

    assert DetailRenderer(table).render(variable) == "new data[E_PLAYER]"


def test_substitution_and_tag_details(table: SymbolTable) -> None:
    details = [s.detail for s in table.substitutions]

    assert details == [
        "#define MAX(%0,%1) ((%0)>(%1)?(%0):(%1))",
        "#define SQUARE(%0) ((%0)*(%0))",
        '#define VERSION "1.0"',
    ]
    assert _render(Substitution(pattern="DEBUG", match_length=5)) == "#define DEBUG"
    assert [t.detail for t in table.tags][:2] == ["_:", "bool:"]


def test_array_dims_from_records() -> None:
    builder = TableBuilder()
    builder.ingest(
        RecordKind.VARIABLES,
        [
            VariableRecord(
                name="grid",
                ident=Ident.ARRAY,
                array=[ArrayDimRecord(array_value=3), ArrayDimRecord(array_value=4)],
            )
        ],
    )

    assert builder.build().variables[0].detail == "new grid[3][4]"
