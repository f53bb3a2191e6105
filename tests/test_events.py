import json

from aiask.citations import Citation
from aiask.events import CitationFound, ContentDelta, StreamEnd, parse_payload


def test_done_sentinel() -> None:
    assert parse_payload("[DONE]") == [StreamEnd()]


def test_content_delta() -> None:
    payload = json.dumps({"choices": [{"delta": {"content": "Hello"}}]})
    assert parse_payload(payload) == [ContentDelta("Hello")]


def test_malformed_payloads_are_ignored() -> None:
    assert parse_payload("{not json") == []
    assert parse_payload("[1, 2]") == []
    assert parse_payload('{"choices": null}') == []
    assert parse_payload("") == []


def test_empty_choices_and_unknown_fields() -> None:
    assert parse_payload('{"choices": []}') == []
    assert parse_payload('{"id": "x", "usage": {"total_tokens": 3}}') == []
    payload = '{"choices": [{"index": 0, "delta": {"role": "assistant", "content": ""}}]}'
    assert parse_payload(payload) == []


def test_content_before_citations() -> None:
    payload = json.dumps(
        {
            "choices": [
                {
                    "delta": {
                        "content": "Answer",
                        "annotations": [
                            {"type": "file_citation", "file_citation": {"file_id": "f"}},
                            {
                                "type": "url_citation",
                                "url_citation": {"url": "https://a.test", "content": "snippet"},
                            },
                            {
                                "type": "url_citation",
                                "url_citation": {"url": "https://b.test", "title": "B"},
                            },
                        ],
                    }
                }
            ]
        }
    )
    assert parse_payload(payload) == [
        ContentDelta("Answer"),
        CitationFound(Citation(url="https://a.test", title="Untitled", content="snippet")),
        CitationFound(Citation(url="https://b.test", title="B")),
    ]


def test_citation_without_url_is_skipped() -> None:
    payload = json.dumps(
        {"choices": [{"delta": {"annotations": [{"type": "url_citation", "url_citation": {}}]}}]}
    )
    assert parse_payload(payload) == []


def test_message_annotations_fallback() -> None:
    payload = json.dumps(
        {
            "choices": [
                {
                    "delta": {},
                    "message": {
                        "annotations": [
                            {"type": "url_citation", "url_citation": {"url": "https://c.test"}}
                        ]
                    },
                }
            ]
        }
    )
    assert parse_payload(payload) == [CitationFound(Citation(url="https://c.test"))]


def test_odd_annotation_keeps_content() -> None:
    payload = '{"choices":[{"delta":{"content":"Hi","annotations":[null]}}]}'
    assert parse_payload(payload) == [ContentDelta("Hi")]

    payload = '{"choices":[{"delta":{"content":"Hi","annotations":"oops"}}]}'
    assert parse_payload(payload) == [ContentDelta("Hi")]


def test_bad_annotation_entry_is_skipped() -> None:
    payload = json.dumps(
        {
            "choices": [
                {
                    "delta": {
                        "content": "Hi",
                        "annotations": [
                            {
                                "type": "url_citation",
                                "url_citation": {"url": "https://x.test", "title": 7},
                            },
                            {
                                "type": "url_citation",
                                "url_citation": {"url": "https://ok.test", "title": "Ok"},
                            },
                        ],
                    }
                }
            ]
        }
    )
    events = parse_payload(payload)
    assert events[0] == ContentDelta("Hi")
    assert CitationFound(Citation(url="https://ok.test", title="Ok")) in events
