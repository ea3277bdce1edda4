from quizdesk.text_format import CODE_BLOCK, INLINE_CODE, TEXT, Segment, render_plain, split_code_segments


def test_split_inline_code() -> None:
    assert split_code_segments("Call `print()` twice") == [
        Segment(TEXT, "Call "),
        Segment(INLINE_CODE, "print()"),
        Segment(TEXT, " twice"),
    ]


def test_fenced_block_is_split_out() -> None:
    assert split_code_segments("Output of:```\nx = 1\n``` is?") == [
        Segment(TEXT, "Output of:"),
        Segment(CODE_BLOCK, "\nx = 1\n"),
        Segment(TEXT, " is?"),
    ]


def test_empty_text_has_no_segments() -> None:
    assert split_code_segments(None) == []
    assert split_code_segments("") == []
    assert render_plain(None) == ""


def test_render_plain_indents_blocks() -> None:
    rendered = render_plain("What prints?```\nfor i in range(2):\n    print(i)\n```")
    assert rendered == "What prints?\n    for i in range(2):\n        print(i)"
