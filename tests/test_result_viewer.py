from result_viewer import ResultViewer, format_result_lines


def test_format_result_lines():
    assert format_result_lines("P0", {"force": "10 N", "rate": 0.5}) == [
        "force: 10 N",
        "rate: 0.5",
    ]


def test_grouped_result_lines():
    data = {
        "PUSH force": "10 N",
        "PUSH speed": "5 mm/s",
        "PULL force": "8 N",
        "PULL speed": "4 mm/s",
    }
    assert format_result_lines("P1", data) == [
        "-PUSH-force: 10 N",
        "speed: 5 mm/s",
        "-PULL-force: 8 N",
        "speed: 4 mm/s",
    ]
    assert format_result_lines("P1", {"PULL force": "8 N"}) == ["-PULL-force: 8 N"]


def test_short_content_does_not_scroll():
    viewer = ResultViewer({"a": 1, "b": 2}, viewport_height=76.0, line_height=25.2)
    assert viewer.text == "a: 1\nb: 2"
    assert not viewer.scrollable
    assert viewer.max_scroll == 0
    viewer.scroll_down()
    assert viewer.scroll_offset == 0
    assert not viewer.show_up_indicator
    assert not viewer.show_down_indicator


def test_scroll_is_clamped():
    viewer = ResultViewer([f"line {i}" for i in range(6)], viewport_height=76.0, line_height=25.2)
    assert viewer.scrollable
    assert viewer.visible_lines() == ["line 0", "line 1", "line 2", "line 3"]
    assert not viewer.show_up_indicator
    assert viewer.show_down_indicator

    viewer.scroll_down()
    assert viewer.scroll_offset == 25.2
    assert viewer.show_up_indicator
    assert viewer.visible_lines()[0] == "line 1"

    for _ in range(10):
        viewer.scroll_down()
    assert viewer.scroll_offset == viewer.max_scroll
    assert not viewer.show_down_indicator

    for _ in range(10):
        viewer.scroll_up()
    assert viewer.scroll_offset == 0
    assert not viewer.show_up_indicator
