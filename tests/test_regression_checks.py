"""Recorridos completos de teclado comparando pantalla esperada y obtenida."""

from display_controller import DisplayController


def _walk(scheduler, client, keys):
    controller = DisplayController(scheduler, client=client)
    for key in keys:
        if key == "=":
            controller.calculate()
        elif key in ("+", "-", "×", "÷"):
            controller.press_operator(key)
        elif key == "BS":
            controller.clear("char")
        elif key in ("left", "right"):
            controller.move_cursor(key)
        else:
            controller.press_key(key)
    return controller


def test_keyboard_walks(scheduler, fake_client):
    expected_actual: list[tuple[str, str, str]] = []

    walks = [
        ("sum", ["5", "+", "3", "="], "8"),
        ("precedence", ["2", "+", "3", "×", "4", "="], "14"),
        ("negative result", ["3", "-", "5", "="], "-2"),
        ("chained result", ["3", "-", "5", "=", "×", "4", "="], "-8"),
        ("decimal keeps zero", [".", "5", "+", "1", "="], "1.5"),
        ("float noise goes exponential", [".", "1", "+", ".", "2", "="], "3.000000000e-1"),
        ("large product", [*"99999999", "×", *"99999999", "="], "9.999999800e+15"),
        ("backspace over operator", ["5", "+", "BS", "BS", "BS", "2", "="], "52"),
        ("edit in the middle", ["1", "3", "left", "2", "="], "123"),
    ]

    for label, keys, expected in walks:
        controller = _walk(scheduler, fake_client, keys)
        expected_actual.append((label, expected, controller.buffer.text))

    failed = [
        f"{label}: expected {expected!r}, got {actual!r}"
        for label, expected, actual in expected_actual
        if expected != actual
    ]
    assert not failed, "\n".join(failed)


def test_display_walks(scheduler, fake_client):
    checks: list[tuple[str, bool]] = []

    controller = _walk(scheduler, fake_client, list("1000000"))
    rendered = controller.render()
    checks.append(("million is grouped", rendered.text == "1,000,000"))
    checks.append(("cursor at end maps past last digit", rendered.cursor == 9))

    controller = _walk(scheduler, fake_client, [*"1234", "+", *"5678"])
    rendered = controller.render()
    checks.append(("both operands grouped", rendered.text == "1,234 + 5,678"))
    checks.append(("medium font for 13 chars", rendered.font_tier == "medium"))

    controller = _walk(scheduler, fake_client, [*"25", "×", *"1000000000", "×", *"1000000", "="])
    checks.append(("exponential result is not grouped",
                   controller.render().text == "2.500000000e+16"))

    failed = [name for name, ok in checks if not ok]
    assert not failed, failed
