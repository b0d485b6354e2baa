import json

import pytest

from src.integrations.contracts.errors import ApiError
from src.integrations.contracts.families import Family
from src.integrations.contracts.responses import BatchUpsertReport

from conftest import BATCH_HEADERS


def _families():
    return [
        Family(code="shoes", attribute_as_label="name", labels={"en_US": "Shoes"}),
        Family(code="hats", attribute_as_label="name"),
    ]


def test_body_is_one_json_document_per_line(family_api, transport):
    transport.reply(200, b'{"line":1,"code":"shoes","status_code":204}\n{"line":2,"code":"hats","status_code":201}\n')

    family_api.batch_upsert(_families())

    call = transport.calls[0]
    assert call["method"] == "PATCH"
    assert call["path"] == "families"
    assert call["headers"] == BATCH_HEADERS
    body = call["body"]
    assert body.endswith(b"\n")
    lines = body.split(b"\n")[:-1]
    assert [json.loads(line)["code"] for line in lines] == ["shoes", "hats"]
    assert not body.startswith(b"[")


def test_embedded_line_error_is_data_not_exception(family_api, transport):
    stream = transport.reply(
        200,
        chunks=[
            b'{"line":1,"code":"shoes","status_code":204}\n{"line":2,"code":"hats",',
            b'"status_code":422,"message":"Validation failed.",'
            b'"errors":[{"property":"attribute_as_label","message":"This value should not be blank."}]}\n',
        ],
    )

    results = family_api.batch_upsert(_families())

    assert len(results) == 2
    assert [r.code for r in results] == ["shoes", "hats"]
    assert results[0].is_success
    assert not results[1].is_success
    assert results[1].errors[0].property == "attribute_as_label"
    assert stream.closed


def test_malformed_line_discards_partial_results(family_api, transport):
    stream = transport.reply(
        200,
        b'{"line":1,"code":"shoes","status_code":204}\nnot-json\n{"line":3,"code":"x","status_code":201}\n',
    )

    with pytest.raises(ApiError) as exc_info:
        family_api.batch_upsert(_families())

    assert exc_info.value.code is None
    assert stream.closed


def test_whole_batch_status_error(family_api, transport):
    stream = transport.reply(415, b'{"code":415,"message":"unsupported content type"}')

    with pytest.raises(ApiError) as exc_info:
        family_api.batch_upsert(_families())

    assert exc_info.value.code == 415
    assert exc_info.value.message == '{"code":415,"message":"unsupported content type"}'
    assert stream.closed


def test_empty_batch_sends_empty_body(family_api, transport):
    transport.reply(200, b"")

    assert family_api.batch_upsert([]) == []
    assert transport.calls[0]["body"] == b""


def test_report_summarizes_failures(family_api, transport):
    transport.reply(
        200,
        b'{"line":1,"code":"shoes","status_code":204}\n'
        b'{"line":2,"code":"hats","status_code":422,"message":"Validation failed."}\n'
        b'{"line":3,"status_code":400,"message":"Invalid json message received"}\n',
    )

    report = BatchUpsertReport.from_lines(family_api.batch_upsert(_families()))

    assert report.total == 3
    assert report.successful == 1
    assert report.failed == 2
    assert report.failure_messages() == {
        "hats": "Validation failed.",
        "line:3": "Invalid json message received",
    }


def test_lines_split_across_chunks_only_on_newline(family_api, transport):
    transport.reply(
        200,
        chunks=[
            '{"line":1,"code":"shoes","status_code":422,"message":"label \u2028'.encode("utf-8"),
            'broken"}\r'.encode("utf-8"),
            b'\n{"line":2,"code":"hats","status_code":201}',
        ],
    )

    results = family_api.batch_upsert(_families())

    assert [r.code for r in results] == ["shoes", "hats"]
    assert results[0].message == "label \u2028broken"
