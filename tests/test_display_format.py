from display_format import (
    display_cursor_offset,
    format_expression_for_display,
    format_number_string,
    raw_cursor_offset,
    split_expression,
    strip_separators,
)


def test_format_number_string():
    assert format_number_string("1000000") == "1,000,000"
    assert format_number_string("1234567.891") == "1,234,567.891"
    assert format_number_string("-1000") == "-1,000"
    assert format_number_string("123") == "123"
    assert format_number_string("0.00012345") == "0.00012345"
    assert format_number_string("1234.") == "1,234."


def test_format_number_string_keeps_digits():
    for numeral in ["0", "5", "12345", "-98765.4321", "1000000000000.5", ".5"]:
        assert strip_separators(format_number_string(numeral)) == numeral


def test_split_expression_keeps_operators():
    assert split_expression("12 + 3 × 4") == ["12", " + ", "3", " × ", "4"]
    assert split_expression("2.500000000e+16") == ["2.500000000e+16"]


def test_format_expression_for_display():
    assert format_expression_for_display("1000000") == "1,000,000"
    assert format_expression_for_display("1000000 + 2500 × 3") == "1,000,000 + 2,500 × 3"
    assert format_expression_for_display("12345 ÷ 1000.25") == "12,345 ÷ 1,000.25"
    # los resultados exponenciales no se tocan
    assert format_expression_for_display("2.500000000e+16 + 1000") == "2.500000000e+16 + 1,000"
    # operando incompleto al final
    assert format_expression_for_display("1000 - ") == "1,000 - "
    assert format_expression_for_display("(1000") == "(1000"


def test_cursor_at_end_of_grouped_number():
    assert display_cursor_offset("1000000", 7) == 9
    assert display_cursor_offset("1000000", 0) == 0
    assert display_cursor_offset("1000000", 1) == 1
    assert display_cursor_offset("1000000", 2) == 3


def test_cursor_offsets_stay_in_bounds():
    for raw in ["0", "1234567 + 89", "1000.5 × 20000", "2.500000000e+16 - 1000"]:
        formatted = format_expression_for_display(raw)
        for cursor in range(len(raw) + 1):
            offset = display_cursor_offset(raw, cursor, formatted)
            assert 0 <= offset <= len(formatted)
            assert len(strip_separators(formatted[:offset])) == len(strip_separators(raw[:cursor]))


def test_raw_cursor_offset_inverts_display_offset():
    raw = "1234567 + 89000"
    for cursor in range(len(raw) + 1):
        assert raw_cursor_offset(raw, display_cursor_offset(raw, cursor)) == cursor

    # clic sobre un separador: cuenta los dígitos anteriores
    assert raw_cursor_offset("1000000", 2) == 1
    assert raw_cursor_offset("1000000", 100) == 7
    assert raw_cursor_offset("1000000", -3) == 0
