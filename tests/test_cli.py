"""Tests for the terminal client."""

import asyncio

import cli_search
from app.errors import BadRequestError


def test_build_payload_maps_value_to_intent_field():
    assert cli_search.build_payload("url", "https://s/p/a") == {"type": "url", "url": "https://s/p/a"}
    assert cli_search.build_payload("nlp", "red shoes", category="Shoes", limit=3) == {
        "type": "nlp",
        "query": "red shoes",
        "category": "Shoes",
        "limit": 3,
    }


def test_read_batch_skips_blanks_and_comments(tmp_path):
    batch = tmp_path / "queries.txt"
    batch.write_text("# intents\nitem SKU-1\n\nnlp summer dress\n", encoding="utf-8")

    payloads = cli_search.read_batch(batch, limit=2)

    assert payloads == [
        {"type": "item", "itemId": "SKU-1", "limit": 2},
        {"type": "nlp", "query": "summer dress", "limit": 2},
    ]


def test_perform_searches_collects_results_and_errors(settings, fake_upstream, capsys):
    fake_upstream.reply_data({"search": [{"title": "Jacket", "department": "Outerwear"}]})
    payloads = [{"type": "nlp", "query": "jacket"}, {"type": "nlp"}]

    outcomes = asyncio.run(cli_search.perform_searches(settings, payloads, transport=fake_upstream.transport))

    assert outcomes[0].items[0].productTitle == "Jacket"
    assert isinstance(outcomes[1], BadRequestError)
    assert len(fake_upstream.requests) == 1

    cli_search.pretty_print_response(payloads[0], outcomes[0])
    cli_search.pretty_print_response(payloads[1], outcomes[1])
    out = capsys.readouterr().out
    assert "results: 1" in out
    assert "01. Jacket" in out
    assert "query is required" in out


def test_main_without_api_key_exits_with_error(monkeypatch, capsys):
    monkeypatch.delenv("UPSTREAM_API_KEY", raising=False)

    assert cli_search.main(["nlp", "shoes"]) == 2
    assert "UPSTREAM_API_KEY" in capsys.readouterr().out
