from __future__ import annotations

import io
import json

from pastepouch.cli import PasteMenu


def _run(service, script: str) -> str:
    out = io.StringIO()
    PasteMenu(service, stdin=io.StringIO(script), stdout=out).run()
    return out.getvalue()


def _json_lines(output: str) -> list:
    # prompts are not newline-terminated, so JSON may follow one on the same line
    return [json.loads(line[line.index("["):]) for line in output.splitlines() if "[" in line]


def test_create_and_list_users(service):
    output = _run(service, "3\nAda\nada@example.com\n1\n9\n0\n")
    assert "createUser> Enter name: " in output
    assert "createUser> OK" in output
    assert '[{"id":1,"name":"Ada","email":"ada@example.com"}]' in output
    assert _json_lines(output)[-1] == [{"count": 1}]


def test_paste_lifecycle(service):
    script = "\n".join(
        [
            "4", "1", "  hello world  ",
            "5", "1",
            "7", "1", "bye",
            "5", "1",
            "6", "1",
            "5", "1",
            "8",
        ]
    ) + "\n"
    output = _run(service, script)
    assert "createPaste> Your content was: hello world" in output
    assert _json_lines(output) == [
        [{"id": 1, "userid": 1, "content": "hello world"}],
        [],
        [{"id": 1, "userid": 1, "content": "bye"}],
        [],
        [],
        [{"count": 0}],
    ]


def test_duplicate_email_reports_error_and_continues(service):
    output = _run(service, "3\nAda\nada@example.com\n3\nAda\nada@example.com\n9\n")
    assert "error: " in output
    assert _json_lines(output)[-1] == [{"count": 1}]


def test_invalid_input_returns_to_menu(service):
    output = _run(service, "banana\n42\n5\nnot-a-number\n2\n")
    assert "Not a number: 'not-a-number'" in output
    assert _json_lines(output) == [[]]


def test_end_of_input_mid_prompt_stops_loop(service):
    output = _run(service, "3\nAda\n")
    assert "createUser> Enter email: " in output
    assert "createUser> OK" not in output


def test_out_of_range_paste_id_keeps_looping(service):
    output = _run(service, "5\n99999999999999999999\n2\n")
    assert _json_lines(output) == [[], []]


def test_out_of_range_userid_reports_error(service):
    output = _run(service, f"4\n{2 ** 64}\nbig\n8\n")
    assert "error: " in output
    assert _json_lines(output)[-1] == [{"count": 0}]
